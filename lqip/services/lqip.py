# lqip/services/lqip.py
from __future__ import annotations
import base64
import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from io import BytesIO
from pathlib import Path
from typing import BinaryIO, Dict, Optional, Tuple, Union

from PIL import Image as PILImage, ImageOps

from ..config import settings
from ..errors import ImageBase64Error, ImageConfigError
from ..schemas import ImageData
from ..utils import truncate_ratio
from . import palette
from .palette import Swatch

logger = logging.getLogger(__name__)

Source = Union[str, Path, BinaryIO]

# Pillow format name -> tag used in data URIs
FORMAT_TAGS = {"PNG": "png", "GIF": "gif", "JPEG": "jpeg", "MPO": "jpeg"}

# Formats previews can be re-encoded in
ENCODERS = {"png": "PNG", "gif": "GIF", "jpeg": "JPEG"}

# Grayscale modes with 16-bit samples
WIDE_GRAY_MODES = ("I", "I;16", "I;16B", "I;16L", "I;16N")


def _normalize(img: PILImage.Image) -> PILImage.Image:
    im = ImageOps.exif_transpose(img)
    if im.mode in ("RGB", "RGBA", "L"):
        return im
    if im.mode in WIDE_GRAY_MODES:
        # scale down to 8 bits, a plain convert() clips at 255
        return im.convert("I").point(lambda v: v * (1 / 256)).convert("L")
    if "A" in im.mode or "transparency" in im.info:
        return im.convert("RGBA")
    return im.convert("RGB")


def _source_name(source: Source) -> str:
    if isinstance(source, (str, Path)):
        return str(source)
    return str(getattr(source, "name", "<stream>"))


def to_data_uri(img: PILImage.Image, fmt: str) -> str:
    """
    Encode a raster in ``fmt`` and wrap it as a base64 data URI.

    Args:
        img (PIL.Image.Image): Raster to encode.
        fmt (str): Format tag: "png", "gif" or "jpeg".

    Returns:
        str: ``data:image/<fmt>;base64,<payload>``.

    Raises:
        ImageBase64Error: If the format is not supported or encoding fails.
    """
    encoder = ENCODERS.get(fmt)
    if encoder is None:
        raise ImageBase64Error("Unsupported image format")

    params = {}
    if encoder == "JPEG":
        if img.mode not in ("RGB", "L"):
            img = img.convert("RGB")
        params["quality"] = settings.JPEG_QUALITY

    buf = BytesIO()
    try:
        img.save(buf, format=encoder, **params)
    except (OSError, ValueError) as exc:
        raise ImageBase64Error(exc) from exc

    b64 = base64.b64encode(buf.getvalue()).decode("ascii")
    return f"data:image/{fmt};base64,{b64}"


class Image:
    """Lazily decoded image exposing the values an LQIP is built from.

    The source is decoded on first access (or on :meth:`load`) and never
    again; the raster is read-only afterwards, so derived values can be
    computed from several threads at once.
    """

    def __init__(self, source: Source):
        self._source = source
        self._raster: Optional[PILImage.Image] = None
        self._format: Optional[str] = None
        self._lock = threading.Lock()

    def __repr__(self) -> str:
        state = "decoded" if self.decoded else "pending"
        return f"<lqip.Image {_source_name(self._source)!r} {state}>"

    @property
    def name(self) -> str:
        return _source_name(self._source)

    @property
    def decoded(self) -> bool:
        return self._raster is not None

    @property
    def format(self) -> str:
        self._decode()
        return self._format

    @property
    def raster(self) -> PILImage.Image:
        return self._decode()

    def load(self) -> "Image":
        """Decode now instead of on first access.

        Raises:
            ImageConfigError: If the file cannot be read or decoded.
        """
        self._decode()
        return self

    def _decode(self) -> PILImage.Image:
        if self._raster is not None:
            return self._raster
        with self._lock:
            if self._raster is None:
                raster, fmt = self._read()
                # _raster last: the unlocked check above only looks at it
                self._format = fmt
                self._raster = raster
        return self._raster

    def _read(self) -> Tuple[PILImage.Image, str]:
        try:
            with PILImage.open(self._source) as im:
                fmt = FORMAT_TAGS.get(im.format, (im.format or "").lower())
                im.load()
                raster = _normalize(im)
        except (OSError, SyntaxError, ValueError, PILImage.DecompressionBombError) as exc:
            raise ImageConfigError(exc) from exc
        logger.debug("decoded %s: %s %s %dx%d", self.name, fmt, raster.mode, *raster.size)
        return raster, fmt

    def dimensions(self) -> Tuple[int, int]:
        """Return ``(height, width)`` of the decoded raster."""
        width, height = self.raster.size
        return height, width

    def aspect_ratio(self) -> float:
        """Return height / width truncated to two decimals."""
        height, width = self.dimensions()
        return truncate_ratio(height, width)

    def color_palette(self) -> Dict[str, Swatch]:
        """Return named swatches ("vibrant", "muted", ...) of the image.

        Raises:
            ColorPaletteError: If palette extraction fails.
        """
        return palette.extract(
            self.raster,
            settings.PALETTE_COLOR_COUNT,
            settings.PALETTE_MAX_AREA,
        )

    def preview_src(self) -> str:
        """Return a tiny base64 data URI for small placeholders."""
        size = settings.PREVIEW_SIZE
        return self._resize_and_base64(size, size)

    def preview_enhanced_src(self) -> str:
        """Return a slightly larger base64 data URI for big placeholders."""
        size = settings.PREVIEW_ENHANCED_SIZE
        return self._resize_and_base64(size, size)

    def _resize_and_base64(self, width: int, height: int) -> str:
        raster = self.raster
        fmt = self._format
        if fmt not in ENCODERS:
            raise ImageBase64Error("Unsupported image format")
        if width < 1 or height < 1:
            raise ImageBase64Error(f"invalid preview size {width}x{height}")
        try:
            resized = raster.resize((width, height), PILImage.Resampling.LANCZOS)
        except (OSError, ValueError) as exc:
            raise ImageBase64Error(exc) from exc
        uri = to_data_uri(resized, fmt)
        logger.debug("encoded %dx%d %s preview (%d chars)", width, height, fmt, len(uri))
        return uri


def collect_image_data(image: Image, concurrent: Optional[bool] = None) -> ImageData:
    """
    Build the full placeholder payload for an image.

    Palette and both previews only read the decoded raster, so they run on
    separate threads unless ``concurrent`` (or the ``CONCURRENT`` setting)
    is off. The first failure is re-raised.

    Args:
        image (Image): Image to describe; decoded here if it is not yet.
        concurrent (Optional[bool], optional): Override ``settings.CONCURRENT``.

    Returns:
        ImageData: Dimensions, aspect ratio, previews and hex palette.

    Raises:
        LQIPError: Any decode, palette or encoding failure.
    """
    if concurrent is None:
        concurrent = settings.CONCURRENT

    image.load()
    height, width = image.dimensions()
    aspect_ratio = image.aspect_ratio()

    if concurrent:
        with ThreadPoolExecutor(max_workers=3) as ex:
            palette_future = ex.submit(image.color_palette)
            preview_future = ex.submit(image.preview_src)
            enhanced_future = ex.submit(image.preview_enhanced_src)
            preview = preview_future.result()
            enhanced = enhanced_future.result()
            swatches = palette_future.result()
    else:
        swatches = image.color_palette()
        preview = image.preview_src()
        enhanced = image.preview_enhanced_src()

    return ImageData(
        height=height,
        width=width,
        preview_src=preview,
        preview_enhanced_src=enhanced,
        aspect_ratio=aspect_ratio,
        color_palette={name: swatch.hex for name, swatch in swatches.items()},
    )
