"""Text measurement and word wrapping."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Protocol

from PIL import ImageFont

logger = logging.getLogger(__name__)

ELLIPSIS = "..."

# Tried in order when no font is configured through the environment
REGULAR_FONTS = ("DejaVuSans.ttf", "Arial.ttf", "arial.ttf", "LiberationSans-Regular.ttf")
BOLD_FONTS = ("DejaVuSans-Bold.ttf", "Arial Bold.ttf", "arialbd.ttf", "LiberationSans-Bold.ttf")


class TextMeasurer(Protocol):
    """Anything that can report the rendered width of a string."""

    def measure(self, text: str) -> float: ...


class CharWidthMeasurer:
    """Estimate width from character count."""

    def __init__(self, char_width: float = 7.0):
        self.char_width = char_width

    def measure(self, text: str) -> float:
        return len(text) * self.char_width


class FontMeasurer:
    """Measure text with a Pillow font."""

    def __init__(self, font: ImageFont.FreeTypeFont | ImageFont.ImageFont):
        self.font = font

    def measure(self, text: str) -> float:
        return float(self.font.getlength(text))


@lru_cache(maxsize=None)
def load_font(size: int, bold: bool = False) -> ImageFont.FreeTypeFont | ImageFont.ImageFont:
    """Load a font for drawing and measuring.

    FLOWPLOT_BOLD_FONT / FLOWPLOT_FONT override the font file. Otherwise
    common system fonts are tried before Pillow's bundled default font.
    """
    env_font = os.getenv("FLOWPLOT_BOLD_FONT" if bold else "FLOWPLOT_FONT")
    candidates = ((env_font,) if env_font else ()) + (BOLD_FONTS if bold else REGULAR_FONTS)

    for name in candidates:
        try:
            return ImageFont.truetype(name, size=size)
        except OSError:
            continue

    logger.debug("No TrueType font found for size %s, using Pillow default", size)
    return ImageFont.load_default(size=size)


def truncate_word(word: str, max_chars: int = 15) -> str:
    """Cut a word that cannot fit on a line and mark it with an ellipsis."""
    return word[:max_chars] + ELLIPSIS


def wrap_text(
    text: str,
    max_width: float,
    measurer: TextMeasurer,
    max_word_chars: int = 15,
) -> list[str]:
    """Greedy word wrap.

    Words are added to the current line while the measured width stays
    within max_width. A word too wide for a line of its own is truncated
    and emitted alone.
    """
    lines: list[str] = []
    current = ""

    for word in text.split():
        candidate = f"{current} {word}" if current else word
        if measurer.measure(candidate) <= max_width:
            current = candidate
            continue

        if current:
            lines.append(current)
            current = ""

        if measurer.measure(word) <= max_width:
            current = word
        else:
            lines.append(truncate_word(word, max_word_chars))

    if current:
        lines.append(current)

    return lines


def line_centers(count: int, center_y: float, line_height: float = 14) -> list[float]:
    """Vertical centers of `count` lines forming a block centered on center_y."""
    first = center_y - count * line_height / 2 + line_height / 2
    return [first + i * line_height for i in range(count)]
