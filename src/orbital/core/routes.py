"""Route to camera pose mapping and route-driven retargeting."""

from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Mapping, Optional
import logging

import yaml

from orbital.core.camera import CameraPose, CameraStateManager

logger = logging.getLogger(__name__)

HOME_ROUTE = "/"

DEFAULT_ROUTE_POSES: Dict[str, CameraPose] = {
    "/": CameraPose(0, 0, 0, 0),
    "/explore": CameraPose(-400, -200, 150, -20),
    "/engage": CameraPose(300, 150, -100, 15),
    "/enlist": CameraPose(500, -300, 200, 30),
}


class RouteTable:
    """Static mapping from route identifiers to camera poses.

    The table must contain a default entry (``/`` unless told otherwise);
    unknown routes resolve to it.
    """

    def __init__(
        self,
        poses: Mapping[str, CameraPose] | None = None,
        default_route: str = HOME_ROUTE,
    ) -> None:
        self._poses: Dict[str, CameraPose] = dict(poses or DEFAULT_ROUTE_POSES)
        if default_route not in self._poses:
            raise ValueError(f"Route table has no default entry '{default_route}'")
        self.default_route = default_route

    def resolve(self, route: str | None) -> CameraPose:
        """Get the pose for a route, falling back to the default pose."""
        if route is not None and route in self._poses:
            return self._poses[route]
        logger.warning(f"Unknown route '{route}', using '{self.default_route}' pose")
        return self._poses[self.default_route]

    def __contains__(self, route: object) -> bool:
        return route in self._poses

    def __iter__(self) -> Iterator[str]:
        return iter(self._poses)

    def __len__(self) -> int:
        return len(self._poses)

    @property
    def routes(self) -> List[str]:
        return list(self._poses)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "RouteTable":
        """Build a table from ``{"default": "/", "routes": {route: {x, y, z, rotation}}}``."""
        routes = data.get("routes", {})
        poses = {
            str(route): CameraPose(
                x=float(values.get("x", 0.0)),
                y=float(values.get("y", 0.0)),
                z=float(values.get("z", 0.0)),
                rotation=float(values.get("rotation", 0.0)),
            )
            for route, values in routes.items()
        }
        return cls(poses, default_route=data.get("default", HOME_ROUTE))

    @classmethod
    def from_yaml(cls, path: Path) -> "RouteTable":
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        return cls.from_dict(data)


class RouteTracker:
    """Follows the active route and retargets the camera when it changes.

    Args:
        camera: Camera to retarget
        table: Route to pose mapping
        initial_route: Route the page was loaded on
    """

    def __init__(
        self,
        camera: CameraStateManager,
        table: RouteTable,
        initial_route: str = HOME_ROUTE,
    ) -> None:
        self.camera = camera
        self.table = table
        self._route = initial_route
        self._listeners: List[Callable[[str, str], None]] = []

    @property
    def route(self) -> str:
        return self._route

    def navigate(self, route: str) -> bool:
        """Make ``route`` the active route.

        Returns:
            True if the camera target changed
        """
        old_route = self._route
        self._route = route

        pose = self.table.resolve(route)
        retargeted = pose != self.camera.get_target()
        if retargeted:
            self.camera.set_target(pose, smooth=True)

        logger.info(f"Route: {old_route} -> {route} (retarget={retargeted})")

        for listener in self._listeners:
            try:
                listener(old_route, route)
            except Exception as e:
                logger.error(f"Error in route listener: {e}")

        return retargeted

    def add_listener(self, callback: Callable[[str, str], None]) -> None:
        self._listeners.append(callback)

    def remove_listener(self, callback: Callable[[str, str], None]) -> None:
        if callback in self._listeners:
            self._listeners.remove(callback)


def initial_pose(table: RouteTable, route: Optional[str]) -> CameraPose:
    """Pose the camera should start at when a page is loaded on ``route``."""
    return table.resolve(route or table.default_route)
