# text_layout.py
from typing import Callable, List, Optional

# Rough average glyph width for Latin text, as a fraction of the font size
AVERAGE_CHAR_WIDTH_FACTOR = 0.6


def approximate_text_width(text: str, font_size: float) -> float:
    return len(text) * font_size * AVERAGE_CHAR_WIDTH_FACTOR


def wrap_text(
    text: str,
    max_width: float,
    font_size: float,
    measure: Optional[Callable[[str], float]] = None,
) -> List[str]:
    """Greedy word-wrap of ``text`` into lines no wider than ``max_width``.

    ``measure`` returns the rendered width of a string; without one the width
    is approximated from ``font_size``. Words are never broken, so a word wider
    than ``max_width`` ends up alone on its own line.
    """
    if measure is None:
        def measure(s):
            return approximate_text_width(s, font_size)

    words = text.split(" ")
    lines = []
    current = words[0]

    for word in words[1:]:
        candidate = f"{current} {word}" if current else word
        if measure(candidate) <= max_width:
            current = candidate
        else:
            if current:
                lines.append(current)
            current = word

    if current:
        lines.append(current)
    return lines
