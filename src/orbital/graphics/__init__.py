"""Buffer drawing primitives and render surfaces."""

from .surface import BufferSurface, RenderSurface, SurfaceUnavailableError

__all__ = ["BufferSurface", "RenderSurface", "SurfaceUnavailableError"]
