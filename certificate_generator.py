# certificate_generator.py
import io
import logging
from functools import lru_cache
from pathlib import Path
from typing import Callable, List, NamedTuple, Optional

from PIL import Image, ImageDraw, ImageFont

from templates import BOLD, SCRIPT, CourseField, TextField, get_template_spec
from text_layout import approximate_text_width, wrap_text

FONT_CANDIDATES = {
    SCRIPT: [
        "DancingScript-Regular.ttf",
        "DancingScript-VariableFont_wght.ttf",
        "BRUSHSCI.TTF",
        "DejaVuSerif-Italic.ttf",
    ],
    BOLD: [
        "arialbd.ttf",
        "Arial Bold.ttf",
        "DejaVuSans-Bold.ttf",
        "LiberationSans-Bold.ttf",
    ],
}


class CourseLayout(NamedTuple):
    lines: List[str]
    size: int
    y: float


@lru_cache(maxsize=64)
def load_font(face: str, size: int, fonts_dir: Optional[str] = None):
    """Return the first loadable font for ``face``, or Pillow's default font."""
    for filename in FONT_CANDIDATES.get(face, FONT_CANDIDATES[BOLD]):
        paths = [str(Path(fonts_dir) / filename)] if fonts_dir else []
        paths.append(filename)
        for path in paths:
            try:
                return ImageFont.truetype(path, size)
            except OSError:
                continue
    logging.warning(f"No TrueType font found for '{face}', using Pillow default")
    return ImageFont.load_default(size)


def text_measurer(font, size: int) -> Callable[[str], float]:
    # Pillow's bitmap fallback font cannot be scaled, so its metrics are useless
    if isinstance(font, ImageFont.FreeTypeFont):
        return font.getlength
    return lambda text: approximate_text_width(text, size)


def fit_course(course: str, field: CourseField, width: int, height: int, measure=None) -> CourseLayout:
    """Wrap the course title; switch to the smaller size and higher anchor if it wraps."""
    lines = wrap_text(course, width * field.wrap_width, field.size, measure)
    if len(lines) > 1:
        y = field.wrapped_y if field.wrapped_y is not None else field.y
        return CourseLayout(lines, field.wrapped_size, height * y)
    return CourseLayout(lines, field.size, height * field.y)


def _draw_lines(draw, lines, x, y, font, fill, line_height):
    """Draw ``lines`` centered on ``x``, the first baseline at ``y``."""
    scalable = isinstance(font, ImageFont.FreeTypeFont)
    for i, line in enumerate(lines):
        line_y = y + i * line_height
        if scalable:
            draw.text((x, line_y), line, fill=fill, font=font, anchor="ms")
        else:
            # bitmap fonts don't support anchors
            draw.text((x - draw.textlength(line, font=font) / 2, line_y), line, fill=fill, font=font)


def _draw_field(draw, text: str, field: TextField, width: int, height: int, fill, fonts_dir):
    x = width / 2 if field.x is None else width * field.x
    font = load_font(field.face, field.size, fonts_dir)
    _draw_lines(draw, [text], x, height * field.y, font, fill, field.size)


def generate_certificate(template_path, data, fonts_dir=None) -> bytes:
    """Render ``data`` (name/course/instructor/date) onto a template image as PNG."""
    template_path = Path(template_path)
    fonts_dir = str(fonts_dir) if fonts_dir else None
    spec = get_template_spec(template_path.name)

    with Image.open(template_path) as img:
        has_alpha = "A" in img.getbands() or "transparency" in img.info
        base = img.convert("RGBA")

    width, height = base.size

    txt_layer = Image.new("RGBA", base.size, (255, 255, 255, 0))
    draw = ImageDraw.Draw(txt_layer)
    fill = spec.text_color

    _draw_field(draw, data.name.strip(), spec.name, width, height, fill, fonts_dir)

    course = spec.course
    measure_font = load_font(course.face, course.size, fonts_dir)
    layout = fit_course(
        data.course, course, width, height, text_measurer(measure_font, course.size)
    )
    _draw_lines(
        draw,
        layout.lines,
        width / 2,
        layout.y,
        load_font(course.face, layout.size, fonts_dir),
        fill,
        course.line_height,
    )

    _draw_field(draw, data.instructor, spec.instructor, width, height, fill, fonts_dir)
    _draw_field(draw, data.date, spec.date, width, height, fill, fonts_dir)

    result = Image.alpha_composite(base, txt_layer)
    if not has_alpha:
        result = result.convert("RGB")
    buffer = io.BytesIO()
    result.save(buffer, format="PNG")
    return buffer.getvalue()
