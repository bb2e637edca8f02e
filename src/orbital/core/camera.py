"""Camera state manager.

Holds three poses: the rendered ``pose``, the route-driven ``target`` and an
optional hover-driven ``preview``. Once per frame the rendered pose eases
toward ``preview or target`` and snaps exactly onto it once every component is
within threshold, after which the frame callback idles until something
changes.
"""

from dataclasses import dataclass
from typing import Optional
import logging

from orbital.core.scheduling import FrameClock, FrameScheduler, TimerHandle

logger = logging.getLogger(__name__)

DEFAULT_EASE = 0.08
DEFAULT_POSITION_THRESHOLD = 0.5
DEFAULT_ROTATION_THRESHOLD = 0.1
DEFAULT_TRANSITION_MS = 2000.0


@dataclass(frozen=True)
class CameraPose:
    """Virtual camera translation plus rotation in degrees."""

    x: float = 0.0
    y: float = 0.0
    z: float = 0.0
    rotation: float = 0.0

    def blend(self, other: "CameraPose", t: float) -> "CameraPose":
        """Return ``self + t * (other - self)`` component-wise."""
        return CameraPose(
            x=self.x + (other.x - self.x) * t,
            y=self.y + (other.y - self.y) * t,
            z=self.z + (other.z - self.z) * t,
            rotation=self.rotation + (other.rotation - self.rotation) * t,
        )

    def is_near(
        self,
        other: "CameraPose",
        threshold: float = DEFAULT_POSITION_THRESHOLD,
        rotation_threshold: float = DEFAULT_ROTATION_THRESHOLD,
    ) -> bool:
        """Check whether every component is strictly within threshold."""
        return (
            abs(self.x - other.x) < threshold
            and abs(self.y - other.y) < threshold
            and abs(self.z - other.z) < threshold
            and abs(self.rotation - other.rotation) < rotation_threshold
        )

    def distance(self, other: "CameraPose") -> float:
        """Largest absolute component difference (Chebyshev distance)."""
        return max(
            abs(self.x - other.x),
            abs(self.y - other.y),
            abs(self.z - other.z),
            abs(self.rotation - other.rotation),
        )


class CameraStateManager:
    """Owns the authoritative camera pose for one mounted scene.

    Instances are created by the scene root and passed to the renderer and
    the radial menu; there is no process-wide camera.

    Args:
        clock: Clock providing the frame scheduler and deadline timers
        initial: Starting pose for both the rendered pose and the target
        ease: Fraction of the remaining distance covered per frame, in (0, 1)
        threshold: Snap threshold for x, y and z
        rotation_threshold: Snap threshold for rotation in degrees
        transition_ms: How long ``is_transitioning`` stays raised after a
            smooth retarget
    """

    def __init__(
        self,
        clock: FrameClock,
        initial: CameraPose | None = None,
        ease: float = DEFAULT_EASE,
        threshold: float = DEFAULT_POSITION_THRESHOLD,
        rotation_threshold: float = DEFAULT_ROTATION_THRESHOLD,
        transition_ms: float = DEFAULT_TRANSITION_MS,
        frames: FrameScheduler | None = None,
    ) -> None:
        if not 0.0 < ease < 1.0:
            raise ValueError(f"ease must be in (0, 1), got {ease}")

        self._clock = clock
        self._frames = frames or clock.scheduler("camera")
        self.ease = ease
        self.threshold = threshold
        self.rotation_threshold = rotation_threshold
        self.transition_ms = transition_ms

        start = initial or CameraPose()
        self._pose = start
        self._target = start
        self._preview: Optional[CameraPose] = None
        self._transitioning = False
        self._transition_timer: Optional[TimerHandle] = None

        logger.debug(f"CameraStateManager initialized at {start}")

    # Read accessors
    def get_pose(self) -> CameraPose:
        """Current rendered pose."""
        return self._pose

    def get_target(self) -> CameraPose:
        """Current route-driven target pose."""
        return self._target

    def get_preview(self) -> Optional[CameraPose]:
        return self._preview

    def is_transitioning(self) -> bool:
        return self._transitioning

    def is_in_preview(self) -> bool:
        return self._preview is not None

    @property
    def effective_target(self) -> CameraPose:
        return self._preview if self._preview is not None else self._target

    @property
    def is_animating(self) -> bool:
        """True while the frame callback is easing toward a target."""
        return self._frames.running

    # Mutators
    def set_target(self, pose: CameraPose, smooth: bool = True) -> None:
        """Replace the target pose.

        With ``smooth`` the rendered pose eases toward it and the
        transitioning flag is held for ``transition_ms``, independent of when
        the easing actually converges. Without it the rendered pose snaps and
        any running transition window ends.
        """
        self._target = pose
        if smooth:
            self._begin_transition_window()
            logger.info(f"Camera retarget (smooth) -> {pose}")
        else:
            self._end_transition_window()
            self._pose = pose
            logger.info(f"Camera retarget (snap) -> {pose}")
        self._wake()

    def preview_position(self, pose: CameraPose, intensity: float = 0.25) -> None:
        """Install ``target + intensity * (pose - target)`` as the preview.

        No-op while transitioning. A later call replaces an earlier preview.
        """
        if self._transitioning:
            logger.debug("Preview ignored: camera is transitioning")
            return
        intensity = max(0.0, min(1.0, intensity))
        self._preview = self._target.blend(pose, intensity)
        logger.debug(f"Camera preview -> {self._preview} (intensity={intensity})")
        self._wake()

    def reset_preview(self) -> None:
        """Drop the preview so easing heads back to the target.

        No-op while transitioning.
        """
        if self._transitioning:
            logger.debug("Preview reset ignored: camera is transitioning")
            return
        if self._preview is not None:
            logger.debug("Camera preview cleared")
        self._preview = None
        self._wake()

    def step(self) -> bool:
        """Advance the rendered pose by one easing step.

        Returns:
            True if the pose is still moving, False once it has snapped onto
            the effective target
        """
        target = self.effective_target
        if self._pose == target:
            return False

        moved = self._pose.blend(target, self.ease)
        if moved.is_near(target, self.threshold, self.rotation_threshold):
            self._pose = target
            return False

        self._pose = moved
        return True

    def teardown(self) -> None:
        """Stop easing and cancel the transition window."""
        self._frames.stop()
        self._end_transition_window()

    # Internal
    def _begin_transition_window(self) -> None:
        # A newer retarget restarts the window instead of letting the older
        # deadline end it early.
        if self._transition_timer is not None:
            self._transition_timer.cancel()
        self._transitioning = True
        self._transition_timer = self._clock.call_later(
            self.transition_ms, self._end_transition_window, name="camera-transition"
        )

    def _end_transition_window(self) -> None:
        if self._transition_timer is not None:
            self._transition_timer.cancel()
            self._transition_timer = None
        if self._transitioning:
            logger.debug("Camera transition window closed")
        self._transitioning = False

    def _wake(self) -> None:
        if self._pose != self.effective_target and not self._frames.running:
            self._frames.start(self._on_frame)

    def _on_frame(self, now_ms: float) -> None:
        if not self.step():
            self._frames.stop()
            logger.debug(f"Camera settled at {self._pose}")

