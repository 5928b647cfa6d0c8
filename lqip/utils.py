from pathlib import Path
from typing import Sequence, Union


def truncate_ratio(numerator: int, denominator: int, places: int = 2) -> float:
    """
    Divide two integers and truncate the result to a fixed number of decimals.

    Integer floor division keeps values such as 29/100 at 0.29 instead of
    drifting to 0.28 through float multiplication.

    Args:
        numerator (int): Dividend, e.g. the image height.
        denominator (int): Divisor, e.g. the image width.
        places (int, optional): Decimal places to keep. Defaults to 2.

    Returns:
        float: The truncated quotient, or 0.0 when the denominator is zero.
    """
    if not denominator:
        return 0.0
    scale = 10 ** places
    return (numerator * scale // denominator) / scale


def to_hex(rgb: Sequence[int]) -> str:
    """
    Format an RGB triple as a web color.

    Args:
        rgb (Sequence[int]): Red, green and blue components (0-255).

    Returns:
        str: Lowercase ``#rrggbb`` string.
    """
    r, g, b = rgb[:3]
    return "#%02x%02x%02x" % (r, g, b)


def hard_wrap(text: str, col_break: int) -> str:
    """
    Break a long string into lines of at most ``col_break`` characters.

    Args:
        text (str): Text to wrap; surrounding whitespace is stripped.
        col_break (int): Maximum line length. Values below 1 disable wrapping.

    Returns:
        str: The wrapped text joined with newlines.
    """
    if col_break < 1:
        return text
    text = text.strip()
    lines = [text[i:i + col_break] for i in range(0, len(text), col_break)]
    return "\n".join(lines)


def json_output_path(input_path: Union[str, Path]) -> Path:
    """
    Derive the JSON output path that sits next to the input image.

    Args:
        input_path (Union[str, Path]): Path of the source image.

    Returns:
        Path: Same directory and stem with a ``.json`` suffix.
    """
    return Path(input_path).with_suffix(".json")
