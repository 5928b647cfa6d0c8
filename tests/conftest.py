from pathlib import Path

import pytest
from PIL import Image


def _gradient(size):
    """RGB image with a horizontal red ramp and a vertical blue ramp."""
    w, h = size
    im = Image.new("RGB", size)
    im.putdata([
        (int(255 * x / max(w - 1, 1)), 80, int(255 * y / max(h - 1, 1)))
        for y in range(h) for x in range(w)
    ])
    return im


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a generated image and returning its path.

    make_image("a.png", (w, h)) writes a gradient; pass color=(r, g, b)
    for a solid fill.
    """

    def _make(name, size=(40, 30), color=None, fmt=None):
        path = Path(tmp_path) / name
        im = Image.new("RGB", size, color) if color is not None else _gradient(size)
        im.save(path, format=fmt)
        return path

    return _make


@pytest.fixture
def png_path(make_image):
    return make_image("photo.png", (40, 30))
