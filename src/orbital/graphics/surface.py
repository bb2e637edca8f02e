"""
Render surface interface.

A surface is whatever the scene is mounted into: a desktop window, an
offscreen buffer in tests. Components ask it for a float frame buffer each
frame and hand the finished frame back through ``present``.
"""

from abc import ABC, abstractmethod
from typing import Optional
import logging

import numpy as np
from numpy.typing import NDArray

from orbital.graphics.primitives import Buffer, new_buffer, to_uint8

logger = logging.getLogger(__name__)


class SurfaceUnavailableError(RuntimeError):
    """Raised when a surface cannot provide a drawable buffer."""


class RenderSurface(ABC):
    """Abstract base class for drawable surfaces."""

    @property
    @abstractmethod
    def width(self) -> int:
        """Surface width in pixels."""
        ...

    @property
    @abstractmethod
    def height(self) -> int:
        """Surface height in pixels."""
        ...

    @abstractmethod
    def acquire(self) -> Buffer:
        """
        Get the drawable frame buffer.

        Returns:
            Float array of shape (height, width, 3)

        Raises:
            SurfaceUnavailableError: If no drawing context can be obtained
        """
        ...

    @abstractmethod
    def present(self, buffer: Buffer) -> None:
        """Publish a finished frame."""
        ...

    def present_static(self, buffer: Buffer) -> None:
        """Publish a frame that will not be redrawn.

        Used for the degraded backdrop when ``acquire`` failed; the default
        simply presents it.
        """
        self.present(buffer)

    @property
    def size(self) -> tuple[int, int]:
        return self.width, self.height


class BufferSurface(RenderSurface):
    """
    Offscreen surface backed by a numpy buffer.

    Args:
        width: Surface width in pixels
        height: Surface height in pixels
        available: When False, ``acquire`` raises, simulating a missing
            drawing context
    """

    def __init__(self, width: int, height: int, available: bool = True) -> None:
        self._width = width
        self._height = height
        self.available = available
        self._buffer = new_buffer(width, height)
        self.frame: Optional[NDArray[np.uint8]] = None
        self.static_frame: Optional[NDArray[np.uint8]] = None
        self.present_count = 0

    @property
    def width(self) -> int:
        return self._width

    @property
    def height(self) -> int:
        return self._height

    def resize(self, width: int, height: int) -> None:
        self._width = width
        self._height = height
        self._buffer = new_buffer(width, height)

    def acquire(self) -> Buffer:
        if not self.available:
            raise SurfaceUnavailableError("offscreen surface disabled")
        if self._buffer.shape[:2] != (self._height, self._width):
            self._buffer = new_buffer(self._width, self._height)
        return self._buffer

    def present(self, buffer: Buffer) -> None:
        self.frame = to_uint8(buffer)
        self.present_count += 1

    def present_static(self, buffer: Buffer) -> None:
        self.static_frame = to_uint8(buffer)
