"""Qt host integration."""

from .frame_driver import FrameDriver

__all__ = ["FrameDriver"]
