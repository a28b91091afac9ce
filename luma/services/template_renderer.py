"""
Template Renderer - ``{{placeholder}}`` substitution for email templates.

Recognized placeholders:
    employee_name, course_name, course_provider, estimated_cost, reason

Rules:
    - A recognized placeholder whose value is missing or None renders as "N/A".
    - Unrecognized placeholders are left verbatim.
    - Decimal amounts render with two decimals ("49.00", "1299.50").
    - Pure and total: never raises, never touches I/O.

Usage:
    from luma.services.template_renderer import render

    render("Course Approval Request: {{course_name}}", {"course_name": "AWS SA"})
    # -> "Course Approval Request: AWS SA"
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Mapping

PLACEHOLDERS = frozenset({
    "employee_name",
    "course_name",
    "course_provider",
    "estimated_cost",
    "reason",
})

MISSING_VALUE = "N/A"
_CENTS = Decimal("0.01")

_TOKEN_RE = re.compile(r"\{\{(\w+)\}\}")


def _money(value: Decimal) -> str:
    if not value.is_finite():
        return str(value)
    try:
        return format(value.quantize(_CENTS, rounding=ROUND_HALF_UP), "f")
    except InvalidOperation:
        return format(value, "f")


def _stringify(value: Any) -> str:
    if value is None:
        return MISSING_VALUE
    if isinstance(value, bool):
        return str(value)
    if isinstance(value, Decimal):
        return _money(value)
    return str(value)


def render(template: str | None, context: Mapping[str, Any] | None = None) -> str:
    """Substitute recognized placeholders in ``template`` with ``context`` values."""
    if not template:
        return template or ""
    ctx = context or {}

    def _replace(match: re.Match) -> str:
        key = match.group(1)
        if key not in PLACEHOLDERS:
            return match.group(0)
        return _stringify(ctx.get(key))

    return _TOKEN_RE.sub(_replace, template)


def placeholders_in(template: str | None) -> list[str]:
    """Return the distinct placeholder names used in ``template``, in order of appearance."""
    seen: list[str] = []
    for name in _TOKEN_RE.findall(template or ""):
        if name not in seen:
            seen.append(name)
    return seen
