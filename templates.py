# templates.py
"""Placement tables for the bundled certificate templates.

Positions are fractions of the template's width/height so one table works at
any resolution. ``x=None`` centers the text horizontally on the image. ``y`` is
the text baseline.
"""
from dataclasses import dataclass
from typing import Dict, Optional, Tuple

BLACK = (0, 0, 0, 255)
WHITE = (255, 255, 255, 255)

SCRIPT = "script"
BOLD = "bold"


@dataclass(frozen=True)
class TextField:
    y: float
    size: int
    face: str = BOLD
    x: Optional[float] = None


@dataclass(frozen=True)
class CourseField(TextField):
    wrap_width: float = 0.8
    line_height: int = 240
    wrapped_size: int = 200
    # Baseline of the first line when the title wraps; None keeps ``y``
    wrapped_y: Optional[float] = None


@dataclass(frozen=True)
class TemplateSpec:
    text_color: Tuple[int, int, int, int]
    name: TextField
    course: CourseField
    instructor: TextField
    date: TextField


def _signature_line(x: float, y: float) -> TextField:
    return TextField(x=x, y=y, size=160)


TEMPLATE_SPECS: Dict[str, TemplateSpec] = {
    "1.png": TemplateSpec(
        text_color=BLACK,
        name=TextField(y=0.58, size=500, face=SCRIPT),
        course=CourseField(y=0.72, size=280, wrapped_y=0.70),
        instructor=_signature_line(0.255, 0.84),
        date=_signature_line(0.75, 0.84),
    ),
    "2.png": TemplateSpec(
        text_color=BLACK,
        name=TextField(y=0.545, size=500, face=SCRIPT),
        course=CourseField(y=0.69, size=280, wrapped_y=0.67),
        instructor=_signature_line(0.375, 0.85),
        date=_signature_line(0.632, 0.85),
    ),
    "3.png": TemplateSpec(
        text_color=BLACK,
        name=TextField(y=0.52, size=400, face=SCRIPT),
        course=CourseField(y=0.67, size=280, wrapped_y=0.65),
        instructor=_signature_line(0.25, 0.79),
        date=_signature_line(0.765, 0.79),
    ),
    # Dark background
    "4.png": TemplateSpec(
        text_color=WHITE,
        name=TextField(y=0.49, size=400, face=SCRIPT),
        course=CourseField(y=0.65, size=280, wrapped_y=0.63),
        instructor=_signature_line(0.316, 0.785),
        date=_signature_line(0.685, 0.785),
    ),
}

DEFAULT_SPEC = TemplateSpec(
    text_color=BLACK,
    name=TextField(y=0.45, size=300, face=BOLD),
    course=CourseField(y=0.55, size=280, wrapped_size=120),
    instructor=_signature_line(0.3, 0.75),
    date=_signature_line(0.7, 0.75),
)

KNOWN_TEMPLATES = tuple(sorted(TEMPLATE_SPECS))


def get_template_spec(template_name: str) -> TemplateSpec:
    return TEMPLATE_SPECS.get(template_name, DEFAULT_SPEC)
