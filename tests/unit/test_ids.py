"""
Unit Tests for Identifiers and CSS Units
========================================

Tests for id validation, page-wide uniqueness checks and CSS length
normalisation.
"""

import pytest

from widgetry.core.css import style_width, validate_css_unit
from widgetry.core.exceptions import DuplicateIdError, InvalidCSSUnitError, InvalidIdError
from widgetry.core.ids import (
    check_unique_ids,
    collect_ids,
    find_duplicate_ids,
    input_ids,
    is_valid_id,
    output_ids,
    validate_id,
)
from widgetry.core.inputs import action_button, numeric_input, text_input
from widgetry.core.outputs import plot_output, text_output
from widgetry.core.tags import TagList, div
from widgetry.models.schemas import BindingKind


class TestIdValidation:
    """Test id syntax rules."""

    @pytest.mark.parametrize("value", ["x", "obs", "input_1", "Plot2", "_private", "123"])
    def test_valid_ids(self, value):
        """Test letters, digits and underscores are accepted."""
        assert is_valid_id(value)
        assert validate_id(value) == value

    @pytest.mark.parametrize("value", ["", "first name", "a-b", "a.b", "näme", "x!", "abc\n", "\nabc"])
    def test_invalid_ids(self, value):
        """Test anything else is rejected."""
        assert not is_valid_id(value)
        with pytest.raises(InvalidIdError):
            validate_id(value)

    def test_non_string_id(self):
        """Test ids must be strings."""
        assert not is_valid_id(3)
        with pytest.raises(InvalidIdError, match="must be a string"):
            validate_id(3)

    def test_error_names_bad_characters(self):
        """Test the error message lists the offending characters."""
        with pytest.raises(InvalidIdError) as exc_info:
            validate_id("my-id.x", "output")
        message = str(exc_info.value)
        assert "output id" in message
        assert "'-'" in message
        assert "'.'" in message

    def test_invalid_id_is_value_error(self):
        """Test id errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            validate_id("bad id")

    def test_constructors_validate_ids(self):
        """Test constructors reject invalid ids at construction time."""
        with pytest.raises(InvalidIdError):
            text_input("first name", "First name")
        with pytest.raises(InvalidIdError):
            plot_output("my-plot")
        with pytest.raises(InvalidIdError):
            text_output("summary\n")
        with pytest.raises(InvalidIdError):
            action_button("", "Go")


class TestIdUniqueness:
    """Test page-wide id checks."""

    def test_collect_ids_in_document_order(self):
        """Test bound ids are collected with their kinds."""
        page = div(text_input("name", "Name"), div(text_output("greeting")), action_button("go", "Go"))
        assert collect_ids(page) == [
            ("name", BindingKind.INPUT),
            ("greeting", BindingKind.OUTPUT),
            ("go", BindingKind.INPUT),
        ]
        assert input_ids(page) == ["name", "go"]
        assert output_ids(page) == ["greeting"]

    def test_unique_ids_pass(self):
        """Test a page with distinct ids passes."""
        page = div(numeric_input("n", "N", 1), plot_output("plot"))
        assert find_duplicate_ids(page) == {}
        check_unique_ids(page)

    def test_duplicate_input_ids(self):
        """Test two inputs with the same id are reported."""
        page = div(text_input("x", "X"), numeric_input("x", "X", 1))
        with pytest.raises(DuplicateIdError) as exc_info:
            check_unique_ids(page)
        assert exc_info.value.duplicate_id == "x"
        assert exc_info.value.kinds == ("input", "input")

    def test_inputs_and_outputs_share_namespace(self):
        """Test an input and an output may not use the same id."""
        page = TagList(text_input("value", "Value"), text_output("value"))
        assert find_duplicate_ids(page) == {"value": ["input", "output"]}
        with pytest.raises(DuplicateIdError, match="input and output"):
            check_unique_ids(page)

    def test_plot_interaction_ids_share_namespace(self):
        """Test plot click, hover and brush ids count as input ids."""
        plot = plot_output("p", click="p_click", brush="p_brush")
        assert collect_ids(div(plot)) == [
            ("p", BindingKind.OUTPUT),
            ("p_click", BindingKind.INPUT),
            ("p_brush", BindingKind.INPUT),
        ]
        check_unique_ids(div(plot))

        page = div(plot_output("p", click="x"), text_input("x", "X"))
        with pytest.raises(DuplicateIdError) as exc_info:
            check_unique_ids(page)
        assert exc_info.value.duplicate_id == "x"
        assert exc_info.value.kinds == ("input", "input")


class TestCSSUnits:
    """Test CSS length normalisation."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            (400, "400px"),
            (1.5, "1.5px"),
            (0, "0px"),
            ("400", "400px"),
            ("400px", "400px"),
            ("100%", "100%"),
            ("2.5em", "2.5em"),
            ("auto", "auto"),
            ("calc(100% - 20px)", "calc(100% - 20px)"),
            (None, None),
        ],
    )
    def test_valid_units(self, value, expected):
        """Test numbers become pixels and CSS lengths pass through."""
        assert validate_css_unit(value) == expected

    @pytest.mark.parametrize("value", ["wide", "100 px", "10furlongs", -5, True])
    def test_invalid_units(self, value):
        """Test values that are not CSS lengths are rejected."""
        with pytest.raises(InvalidCSSUnitError):
            validate_css_unit(value)

    def test_style_width(self):
        """Test width style helper."""
        assert style_width("50%") == "width: 50%;"
        assert style_width(None) is None
