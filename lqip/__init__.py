"""Low Quality Image Placeholder generator."""

__version__ = "1.0.0"

from .errors import ColorPaletteError, ImageBase64Error, ImageConfigError, LQIPError  # noqa: E402
from .schemas import ImageData  # noqa: E402
from .services.lqip import Image, collect_image_data  # noqa: E402

__all__ = [
    "Image",
    "ImageData",
    "collect_image_data",
    "LQIPError",
    "ImageConfigError",
    "ColorPaletteError",
    "ImageBase64Error",
]
