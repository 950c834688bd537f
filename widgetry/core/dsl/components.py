"""
Component Registry
==================

Maps the ``type`` of a declarative node to the constructor that builds it
and describes how the node's keys become constructor arguments.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional

from widgetry.core import inputs, layouts, outputs
from widgetry.core import tags as html_tags

INPUT = "input"
OUTPUT = "output"
CONTAINER = "container"
CONTENT = "content"


@dataclass(frozen=True)
class ComponentSpec:
    """How to build one kind of declarative node."""

    name: str
    builder: Callable[..., Any]
    role: str
    # Keys passed positionally, in order, before any children
    positional: List[str] = field(default_factory=list)
    # Keys that must be present
    required: List[str] = field(default_factory=list)
    # Child node types accepted (None accepts any)
    child_types: Optional[List[str]] = None


def _input(name: str, builder: Callable[..., Any], *required: str) -> ComponentSpec:
    return ComponentSpec(name, builder, INPUT, positional=["id", "label"], required=["id", *required])


def _output(name: str, builder: Callable[..., Any]) -> ComponentSpec:
    return ComponentSpec(name, builder, OUTPUT, positional=["id"], required=["id"])


def _content(name: str) -> ComponentSpec:
    return ComponentSpec(name, getattr(html_tags, name), CONTENT)


COMPONENTS: Dict[str, ComponentSpec] = {
    spec.name: spec
    for spec in [
        # Inputs
        _input("text_input", inputs.text_input),
        _input("password_input", inputs.password_input),
        _input("text_area_input", inputs.text_area_input),
        _input("numeric_input", inputs.numeric_input, "value"),
        _input("slider_input", inputs.slider_input, "min", "max", "value"),
        _input("date_input", inputs.date_input),
        _input("date_range_input", inputs.date_range_input),
        _input("select_input", inputs.select_input, "choices"),
        _input("radio_buttons", inputs.radio_buttons),
        _input("checkbox_input", inputs.checkbox_input),
        _input("checkbox_group_input", inputs.checkbox_group_input),
        _input("file_input", inputs.file_input),
        _input("action_button", inputs.action_button),
        _input("action_link", inputs.action_link),
        # Outputs
        _output("text_output", outputs.text_output),
        _output("verbatim_text_output", outputs.verbatim_text_output),
        _output("table_output", outputs.table_output),
        _output("data_table_output", outputs.data_table_output),
        _output("plot_output", outputs.plot_output),
        _output("image_output", outputs.image_output),
        _output("ui_output", outputs.ui_output),
        _output("download_button", outputs.download_button),
        _output("download_link", outputs.download_link),
        # Layouts
        ComponentSpec("title_panel", layouts.title_panel, CONTENT, positional=["title"], required=["title"]),
        ComponentSpec("fluid_row", layouts.fluid_row, CONTAINER),
        ComponentSpec("fixed_row", layouts.fixed_row, CONTAINER),
        ComponentSpec("column", layouts.column, CONTAINER, positional=["width"], required=["width"]),
        ComponentSpec("well_panel", layouts.well_panel, CONTAINER),
        ComponentSpec("sidebar_layout", layouts.sidebar_layout, CONTAINER, required=["sidebar", "main"]),
        ComponentSpec(
            "tabset_panel", layouts.tabset_panel, CONTAINER, child_types=["tab_panel", "navbar_menu"]
        ),
        ComponentSpec("navlist_panel", layouts.navlist_panel, CONTAINER, child_types=["tab_panel", "header"]),
        ComponentSpec("tab_panel", layouts.tab_panel, CONTAINER, positional=["title"], required=["title"]),
        ComponentSpec(
            "navbar_menu",
            layouts.navbar_menu,
            CONTAINER,
            positional=["title"],
            required=["title"],
            child_types=["tab_panel"],
        ),
        ComponentSpec("header", lambda text: text, CONTENT, positional=["text"], required=["text"]),
        # Markup
        ComponentSpec("html", html_tags.HTML, CONTENT, positional=["html"], required=["html"]),
        *[
            _content(name)
            for name in (
                "div", "span", "p", "h1", "h2", "h3", "h4", "h5", "h6",
                "a", "img", "br", "hr", "strong", "em", "code", "pre", "ul", "ol", "li",
            )
        ],
    ]
}

PAGE_TYPES = ("fluid", "fixed", "fill", "navbar")

PAGE_BUILDERS: Dict[str, Callable[..., Any]] = {
    "fluid": layouts.fluid_page,
    "fixed": layouts.fixed_page,
    "fill": layouts.fill_page,
    "navbar": layouts.navbar_page,
}


def component_names(role: Optional[str] = None) -> List[str]:
    return [name for name, spec in COMPONENTS.items() if role is None or spec.role == role]
