"""
Grade normalisation — V-scale ordinals and Font conversion.

Every grade handled by the metrics is an integer **ordinal** on the
V-scale (``V0`` → 0 … ``V15`` → 16th position).  The load model uses
*grade points*, which are ``ordinal + 1`` so that a V0 still carries
load::

    V0 → 1 point,  V5 → 6 points,  V15 → 16 points

Grades arrive from the logging layer as loosely formatted strings
(``"V5"``, ``"v5 "``, Font ``"6c"``) or already as integers.  This module
is the single place where those representations are parsed.  Parsing
never raises: anything unrecognisable maps to ordinal ``0``, the lowest
(and therefore most conservative) grade.
"""

from __future__ import annotations

import math
import re
from typing import Any

# ======================================================================
# Scales
# ======================================================================

V_GRADES: list[str] = [f"V{i}" for i in range(16)]

# Approximate V-scale → Font equivalents, index-aligned with V_GRADES.
FONT_GRADES: list[str] = ["4", "5", "5+", "6a+", "6b+", "6c", "7a", "7a+", "7b+", "7c", "7c+", "8a", "8a+", "8b",
                          "8b+", "8c", ]

MIN_ORDINAL = 0
MAX_ORDINAL = len(V_GRADES) - 1

_V_GRADE_RE = re.compile(r"^\s*[vV]\s*(\d+)\s*$")
_FONT_LOOKUP: dict[str, int] = {grade.lower(): idx for idx, grade in enumerate(FONT_GRADES)}


# ======================================================================
# Parsing
# ======================================================================


def _clamp_ordinal(value: int) -> int:
    return max(MIN_ORDINAL, min(MAX_ORDINAL, value))


def _digits_to_ordinal(digits: str) -> int:
    significant = digits.lstrip("0")
    # Longer than any grade; also keeps int() below its digit limit.
    if len(significant) > 2:
        return MAX_ORDINAL
    return _clamp_ordinal(int(significant or "0"))


def parse_grade(value: Any) -> int:
    """Return the V-scale ordinal for *value*.

    Accepts ``"V5"``-style strings (case and whitespace insensitive),
    Font grades with a letter (``"6c"``, ``"7a+"``), plain integers and
    digit strings (read as V ordinals).  Values
    outside V0..V15 are clamped; anything unparsable returns ``0``.
    """
    if isinstance(value, bool):
        return MIN_ORDINAL
    if isinstance(value, int):
        return _clamp_ordinal(value)
    if isinstance(value, float):
        return _clamp_ordinal(int(value)) if math.isfinite(value) else MIN_ORDINAL
    if not isinstance(value, str):
        return MIN_ORDINAL

    match = _V_GRADE_RE.match(value)
    if match:
        return _digits_to_ordinal(match.group(1))

    text = value.strip().lower()
    # Bare digits are V ordinals; Font "4" / "5" are only reachable via font_to_v.
    if text.isascii() and text.isdigit():
        return _digits_to_ordinal(text)
    if text in _FONT_LOOKUP:
        return _FONT_LOOKUP[text]
    return MIN_ORDINAL


def grade_points(ordinal: int) -> int:
    """Load-model grade points: ``ordinal + 1``."""
    return _clamp_ordinal(ordinal) + 1


# ======================================================================
# Display / conversion
# ======================================================================


def grade_label(ordinal: int) -> str:
    """``5`` → ``"V5"``."""
    return V_GRADES[_clamp_ordinal(ordinal)]


def v_to_font(grade: Any) -> str:
    """Convert a V-scale grade to its approximate Font equivalent."""
    return FONT_GRADES[parse_grade(grade)]


def font_to_v(grade: str) -> str:
    """Convert a Font grade to V-scale.

    Unknown Font grades are returned unchanged, so that callers can
    decide how to surface them.
    """
    idx = _FONT_LOOKUP.get(grade.strip().lower())
    if idx is None:
        return grade
    return V_GRADES[idx]
