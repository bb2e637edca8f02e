"""Tests for the route table and route-driven camera retargeting."""

import logging

import pytest

from orbital.config.theme import THEMES_PATH
from orbital.core.camera import CameraPose
from orbital.core.routes import DEFAULT_ROUTE_POSES, RouteTable, RouteTracker, initial_pose

ROUTES_YAML = THEMES_PATH.parent / "routes.yaml"


class TestRouteTable:

    def test_resolves_known_routes(self, routes):
        assert routes.resolve("/explore") == CameraPose(-400, -200, 150, -20)
        assert routes.resolve("/engage") == CameraPose(300, 150, -100, 15)
        assert routes.resolve("/enlist") == CameraPose(500, -300, 200, 30)

    def test_unknown_route_falls_back_to_home(self, routes, caplog):
        with caplog.at_level(logging.WARNING):
            assert routes.resolve("/nowhere") == CameraPose(0, 0, 0, 0)
        assert "Unknown route" in caplog.text

    def test_none_route_falls_back_to_home(self, routes):
        assert routes.resolve(None) == routes.resolve("/")

    def test_missing_default_rejected(self):
        with pytest.raises(ValueError):
            RouteTable({"/explore": CameraPose()})

    def test_custom_default(self):
        table = RouteTable({"/lobby": CameraPose(1, 2, 3, 4)}, default_route="/lobby")
        assert table.resolve("/other") == CameraPose(1, 2, 3, 4)

    def test_container_protocol(self, routes):
        assert "/explore" in routes
        assert "/about" not in routes
        assert len(routes) == 4
        assert list(routes) == routes.routes

    def test_from_dict(self):
        table = RouteTable.from_dict({
            "default": "/",
            "routes": {"/": {}, "/far": {"x": 10, "rotation": -3}},
        })
        assert table.resolve("/far") == CameraPose(10, 0, 0, -3)
        assert table.resolve("/") == CameraPose()

    def test_packaged_yaml_matches_builtin_table(self):
        table = RouteTable.from_yaml(ROUTES_YAML)
        for route, pose in DEFAULT_ROUTE_POSES.items():
            assert table.resolve(route) == pose

    def test_initial_pose(self, routes):
        assert initial_pose(routes, "/engage") == CameraPose(300, 150, -100, 15)
        assert initial_pose(routes, None) == CameraPose()


class TestRouteTracker:

    def test_navigate_retargets_smoothly(self, camera, routes):
        tracker = RouteTracker(camera, routes)
        assert tracker.navigate("/explore") is True
        assert tracker.route == "/explore"
        assert camera.get_target() == CameraPose(-400, -200, 150, -20)
        assert camera.is_transitioning()
        assert camera.get_pose() == CameraPose()

    def test_same_pose_does_not_retarget(self, camera, routes):
        tracker = RouteTracker(camera, routes)
        # /about is unknown, so it resolves to the home pose already targeted
        assert tracker.navigate("/about") is False
        assert not camera.is_transitioning()
        assert tracker.route == "/about"

    def test_listeners_notified(self, camera, routes):
        tracker = RouteTracker(camera, routes)
        changes = []
        tracker.add_listener(lambda old, new: changes.append((old, new)))
        tracker.navigate("/engage")
        assert changes == [("/", "/engage")]

    def test_failing_listener_is_logged(self, camera, routes, caplog):
        tracker = RouteTracker(camera, routes)
        calls = []

        def boom(old, new):
            raise RuntimeError("listener failed")

        tracker.add_listener(boom)
        tracker.add_listener(lambda old, new: calls.append(new))
        with caplog.at_level(logging.ERROR):
            tracker.navigate("/enlist")
        assert calls == ["/enlist"]
        assert "listener failed" in caplog.text

    def test_remove_listener(self, camera, routes):
        tracker = RouteTracker(camera, routes)
        calls = []
        listener = lambda old, new: calls.append(new)
        tracker.add_listener(listener)
        tracker.remove_listener(listener)
        tracker.navigate("/enlist")
        assert calls == []
