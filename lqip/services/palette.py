from __future__ import annotations
import colorsys
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from PIL import Image

from ..errors import ColorPaletteError
from ..utils import to_hex

logger = logging.getLogger(__name__)

RGB = Tuple[int, int, int]

# Lightness windows: (min, target, max)
DARK_LUMA = (0.0, 0.26, 0.45)
NORMAL_LUMA = (0.3, 0.5, 0.7)
LIGHT_LUMA = (0.55, 0.74, 1.0)

# Saturation windows: (min, target, max)
VIBRANT_SATURATION = (0.35, 1.0, 1.0)
MUTED_SATURATION = (0.0, 0.3, 0.4)

WEIGHT_SATURATION = 3
WEIGHT_LUMA = 6
WEIGHT_POPULATION = 1

# Picked in this order; a color claimed by one name is not reused.
TARGETS: Dict[str, Tuple[Tuple[float, float, float], Tuple[float, float, float]]] = {
    "vibrant": (NORMAL_LUMA, VIBRANT_SATURATION),
    "lightVibrant": (LIGHT_LUMA, VIBRANT_SATURATION),
    "darkVibrant": (DARK_LUMA, VIBRANT_SATURATION),
    "muted": (NORMAL_LUMA, MUTED_SATURATION),
    "lightMuted": (LIGHT_LUMA, MUTED_SATURATION),
    "darkMuted": (DARK_LUMA, MUTED_SATURATION),
}


@dataclass(frozen=True)
class Swatch:
    """A representative color and how many pixels it stands for."""

    rgb: RGB
    population: int

    @property
    def hex(self) -> str:
        return to_hex(self.rgb)

    @property
    def hsl(self) -> Tuple[float, float, float]:
        r, g, b = (c / 255.0 for c in self.rgb)
        h, l, s = colorsys.rgb_to_hls(r, g, b)
        return h * 360.0, s, l


def _is_ignored(swatch: Swatch) -> bool:
    hue, sat, luma = swatch.hsl
    if luma <= 0.05 or luma >= 0.95:
        return True
    # skin tones and washed-out oranges
    return 10.0 <= hue <= 37.0 and sat <= 0.82


def _scale_down(img: Image.Image, max_area: int) -> Image.Image:
    w, h = img.size
    area = w * h
    if max_area <= 0 or area <= max_area:
        return img
    ratio = math.sqrt(max_area / float(area))
    size = (max(1, int(w * ratio)), max(1, int(h * ratio)))
    return img.resize(size, Image.Resampling.BOX)


def quantize(img: Image.Image, color_count: int, max_area: int = 0) -> List[Swatch]:
    """Reduce a raster to at most ``color_count`` swatches.

    Images that already have few enough distinct colors keep them exactly;
    everything else goes through Pillow's median-cut quantizer.
    """
    rgb = _scale_down(img.convert("RGB"), max_area)

    exact = rgb.getcolors(maxcolors=color_count)
    if exact is not None:
        return [Swatch(tuple(color), count) for count, color in exact]

    reduced = rgb.quantize(colors=color_count, method=Image.Quantize.MEDIANCUT)
    palette = reduced.getpalette() or []
    swatches = []
    for count, index in reduced.getcolors(maxcolors=256) or []:
        swatches.append(Swatch(tuple(palette[index * 3:index * 3 + 3]), count))
    return swatches


def _invert_diff(value: float, target: float) -> float:
    return 1.0 - abs(value - target)


def _score(swatch: Swatch, target_sat: float, target_luma: float, max_population: int) -> float:
    _, sat, luma = swatch.hsl
    weighted = (
        (_invert_diff(sat, target_sat), WEIGHT_SATURATION),
        (_invert_diff(luma, target_luma), WEIGHT_LUMA),
        (swatch.population / float(max_population), WEIGHT_POPULATION),
    )
    total = sum(value * weight for value, weight in weighted)
    return total / sum(weight for _, weight in weighted)


def _find(
    swatches: List[Swatch],
    luma: Tuple[float, float, float],
    saturation: Tuple[float, float, float],
    taken: List[Swatch],
    max_population: int,
) -> Optional[Swatch]:
    min_luma, target_luma, max_luma = luma
    min_sat, target_sat, max_sat = saturation

    best, best_score = None, 0.0
    for swatch in swatches:
        _, sat, lum = swatch.hsl
        if not (min_sat <= sat <= max_sat and min_luma <= lum <= max_luma):
            continue
        if swatch in taken:
            continue
        value = _score(swatch, target_sat, target_luma, max_population)
        if best is None or value > best_score:
            best, best_score = swatch, value
    return best


def extract(img: Image.Image, color_count: int, max_area: int = 0) -> Dict[str, Swatch]:
    """Extract named swatches ("vibrant", "muted", ...) from a raster.

    Args:
        img (Image.Image): Decoded raster, any mode.
        color_count (int): Number of candidate colors to quantize to.
        max_area (int, optional): Downscale the raster to about this many
            pixels first. 0 disables scaling.

    Returns:
        Dict[str, Swatch]: Swatch per name; names without a matching color
        are left out.

    Raises:
        ColorPaletteError: If quantization fails.
    """
    if color_count < 1:
        raise ColorPaletteError(f"color count must be positive, got {color_count}")
    try:
        candidates = quantize(img, color_count, max_area)
    except (OSError, ValueError) as exc:
        raise ColorPaletteError(exc) from exc

    swatches = [s for s in candidates if not _is_ignored(s)]
    logger.debug("%d of %d quantized colors usable", len(swatches), len(candidates))
    if not swatches:
        return {}

    max_population = max(s.population for s in swatches)
    picked: Dict[str, Swatch] = {}
    for name, (luma, saturation) in TARGETS.items():
        found = _find(swatches, luma, saturation, list(picked.values()), max_population)
        if found is not None:
            picked[name] = found
    return picked
