"""
Template renderer unit tests.

Tests cover:
  - Substitution of every recognized placeholder
  - Missing / None values render as N/A
  - Unknown placeholders are left verbatim
  - Decimal and numeric formatting
  - placeholders_in discovery order
"""
from decimal import Decimal

from luma.services.template_renderer import MISSING_VALUE, placeholders_in, render


CONTEXT = {
    "employee_name": "John Smith",
    "course_name": "AWS Solutions Architect Certification",
    "course_provider": "Udemy",
    "estimated_cost": 199.99,
    "reason": "Cloud migration project",
}


class TestRender:
    def test_all_placeholders(self):
        out = render(
            "{{employee_name}}|{{course_name}}|{{course_provider}}|{{estimated_cost}}|{{reason}}",
            CONTEXT,
        )
        assert out == (
            "John Smith|AWS Solutions Architect Certification|Udemy|199.99|Cloud migration project"
        )

    def test_repeated_placeholder(self):
        assert render("{{course_name}} / {{course_name}}", {"course_name": "X"}) == "X / X"

    def test_missing_value_renders_na(self):
        assert render("Reason: {{reason}}", {}) == f"Reason: {MISSING_VALUE}"
        assert render("Cost: {{estimated_cost}}", {"estimated_cost": None}) == "Cost: N/A"

    def test_unknown_placeholder_left_verbatim(self):
        assert render("Hi {{manager_name}}, {{course_name}}", CONTEXT) == (
            "Hi {{manager_name}}, AWS Solutions Architect Certification"
        )

    def test_decimal_renders_two_places(self):
        assert render("{{estimated_cost}}", {"estimated_cost": Decimal("199.990")}) == "199.99"
        assert render("{{estimated_cost}}", {"estimated_cost": Decimal("200.00")}) == "200.00"
        assert render("{{estimated_cost}}", {"estimated_cost": Decimal("49")}) == "49.00"
        assert render("{{estimated_cost}}", {"estimated_cost": Decimal("1299.5")}) == "1299.50"

    def test_zero_cost_is_not_missing(self):
        assert render("{{estimated_cost}}", {"estimated_cost": 0}) == "0"

    def test_empty_template(self):
        assert render("", CONTEXT) == ""
        assert render(None, CONTEXT) == ""

    def test_no_context(self):
        assert render("{{course_name}}") == "N/A"

    def test_text_without_tokens_unchanged(self):
        assert render("Plain text {not a token}", CONTEXT) == "Plain text {not a token}"


class TestPlaceholdersIn:
    def test_distinct_in_order(self):
        assert placeholders_in("{{reason}} {{course_name}} {{reason}} {{foo}}") == [
            "reason", "course_name", "foo",
        ]

    def test_none(self):
        assert placeholders_in(None) == []
