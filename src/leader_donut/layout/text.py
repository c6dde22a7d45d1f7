"""Label text measurement.

The router takes a ``measure(text, font_size, weight) -> width`` callable.
``approximate_text_width`` is the default; ``pillow_measurer`` measures with
a real font. Caching is the caller's choice via ``memoize_measure``.
"""

from collections.abc import Callable
from functools import lru_cache
from pathlib import Path

MeasureFn = Callable[[str, float, int], float]

# Average glyph advance as a fraction of the font size (sans-serif)
CHAR_WIDTH_FACTOR = 0.6
MIN_TEXT_WIDTH = 4.0
ELLIPSIS = "…"


def approximate_text_width(text: str, font_size: float, weight: int = 600) -> float:
    """Estimate rendered width as character count times an average advance."""
    return max(4, len(str(text))) * font_size * CHAR_WIDTH_FACTOR


def memoize_measure(measure: MeasureFn, maxsize: int = 1024) -> MeasureFn:
    """Wrap a measure function with a cache keyed by (text, font_size, weight)."""

    @lru_cache(maxsize=maxsize)
    def cached(text: str, font_size: float, weight: int = 600) -> float:
        return measure(text, font_size, weight)

    return cached


def pillow_measurer(font_path: Path | str) -> MeasureFn:
    """Build a measure function backed by a TrueType font.

    Fonts are loaded once per size. If the font file cannot be loaded the
    returned function falls back to ``approximate_text_width``. Pillow has no
    notion of weight, so pass the font file of the weight you render with.

    Args:
        font_path: Path to a .ttf/.otf file.

    Returns:
        A measure function.
    """
    from PIL import ImageFont

    @lru_cache(maxsize=64)
    def load(size: int):
        try:
            return ImageFont.truetype(str(font_path), size)
        except OSError:
            return None

    def measure(text: str, font_size: float, weight: int = 600) -> float:
        font = load(max(1, int(round(font_size))))
        if font is None:
            return approximate_text_width(text, font_size, weight)
        width = font.getlength(str(text))
        return width if width > 0 else approximate_text_width(text, font_size, weight)

    return measure


def fit_text(
    text: str,
    max_width: float,
    font_size: float,
    weight: int = 600,
    measure: MeasureFn = approximate_text_width,
) -> str:
    """Shorten text with a trailing ellipsis until it fits max_width.

    Returns text unchanged when it already fits, and just the ellipsis when
    nothing else does.
    """
    if measure(text, font_size, weight) <= max_width:
        return text
    # Binary search on the kept prefix length
    lo, hi = 0, len(text)
    while lo < hi:
        mid = (lo + hi + 1) // 2
        candidate = text[:mid].rstrip() + ELLIPSIS
        if measure(candidate, font_size, weight) <= max_width:
            lo = mid
        else:
            hi = mid - 1
    return text[:lo].rstrip() + ELLIPSIS
