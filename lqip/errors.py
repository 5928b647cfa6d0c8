"""Exceptions raised by the LQIP services.

Every error carries one of the fixed messages below followed by the
underlying cause, and chains the original exception.
"""

ERR_IMAGE_CONFIG = "Cannot obtain image config from the file"
ERR_COLOR_PALETTE = "Cannot obtain color palette from the image"
ERR_IMAGE_BASE64 = "Cannot convert resized image to base64 string"


class LQIPError(Exception):
    """Base class for all errors raised while building a placeholder."""

    message = "LQIP error"

    def __init__(self, cause=None):
        self.cause = cause
        text = f"{self.message}: {cause}" if cause else self.message
        super().__init__(text)


class ImageConfigError(LQIPError):
    """The input could not be read or decoded."""

    message = ERR_IMAGE_CONFIG


class ColorPaletteError(LQIPError):
    """Palette extraction failed."""

    message = ERR_COLOR_PALETTE


class ImageBase64Error(LQIPError):
    """A resized preview could not be encoded."""

    message = ERR_IMAGE_BASE64
