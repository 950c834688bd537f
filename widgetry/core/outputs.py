"""
Output Placeholders
===================

Empty slots that application logic fills with rendered content. Each
placeholder is bound to its output id together with the kind of content it
accepts, which ``fill_outputs`` uses to pair it with a render function.
"""

from typing import Any, Optional

from widgetry.config.settings import get_settings
from widgetry.core.css import validate_css_unit
from widgetry.core.exceptions import InvalidArgumentError
from widgetry.core.ids import validate_id
from widgetry.core.inputs import icon as make_icon
from widgetry.core.tags import Tag
from widgetry.models.schemas import BindingKind, OutputKind


def _placeholder(output_id: str, name: str, output_kind: OutputKind, **attrs: Any) -> Tag:
    tag = Tag(name, id=output_id, **attrs)
    return tag.bind(BindingKind.OUTPUT, output_id, output_kind)


def text_output(output_id: str, container: Optional[str] = None, inline: bool = False) -> Tag:
    """Regular text; rendered inside a ``div`` (or ``span`` when inline)."""
    validate_id(output_id, "output")
    name = container or ("span" if inline else "div")
    return _placeholder(output_id, name, OutputKind.TEXT, class_="shiny-text-output")


def verbatim_text_output(output_id: str, placeholder: bool = False) -> Tag:
    """Fixed-width text, as printed by code. Collapses when empty unless ``placeholder``."""
    validate_id(output_id, "output")
    return _placeholder(
        output_id,
        "pre",
        OutputKind.VERBATIM,
        class_=["shiny-text-output", None if placeholder else "noplaceholder"],
    )


def table_output(output_id: str) -> Tag:
    """Static table, rendered all at once."""
    validate_id(output_id, "output")
    return _placeholder(output_id, "div", OutputKind.TABLE, class_="shiny-html-output")


def data_table_output(output_id: str) -> Tag:
    """Dynamic table with paging, search and sorting handled in the browser."""
    validate_id(output_id, "output")
    return _placeholder(output_id, "div", OutputKind.DATA_TABLE, class_="shiny-datatable-output")


def _graphic_output(
    output_id: str,
    output_kind: OutputKind,
    css_class: str,
    width: Any,
    height: Any,
    click: Optional[str],
    dblclick: Optional[str],
    hover: Optional[str],
    brush: Optional[str],
    inline: bool,
) -> Tag:
    validate_id(output_id, "output")
    settings = get_settings()
    width_unit = validate_css_unit(width if width is not None else settings.default_plot_width)
    height_unit = validate_css_unit(height if height is not None else settings.default_plot_height)
    for name, event_id in (("click", click), ("dblclick", dblclick), ("hover", hover), ("brush", brush)):
        if event_id is not None:
            validate_id(event_id, f"{name} input")
    event_ids = [e for e in (click, dblclick, hover, brush) if e is not None]
    if len(set(event_ids)) < len(event_ids):
        raise InvalidArgumentError("plot interaction ids must differ from each other")

    tag = _placeholder(
        output_id,
        "span" if inline else "div",
        output_kind,
        class_=[css_class, "shiny-report-size" if not inline else None],
        style=f"width: {width_unit}; height: {height_unit};",
        data_click_id=click,
        data_dblclick_id=dblclick,
        data_hover_id=hover,
        data_brush_id=brush,
    )
    tag.metadata["event_ids"] = event_ids
    return tag


def plot_output(
    output_id: str,
    width: Any = None,
    height: Any = None,
    click: Optional[str] = None,
    dblclick: Optional[str] = None,
    hover: Optional[str] = None,
    brush: Optional[str] = None,
    inline: bool = False,
) -> Tag:
    """
    Graphic placeholder; full width and 400 pixels high unless configured.

    ``click``, ``dblclick``, ``hover`` and ``brush`` name the inputs that
    receive pointer events on the plot.
    """
    return _graphic_output(
        output_id, OutputKind.PLOT, "shiny-plot-output", width, height, click, dblclick, hover, brush, inline
    )


def image_output(
    output_id: str,
    width: Any = None,
    height: Any = None,
    click: Optional[str] = None,
    dblclick: Optional[str] = None,
    hover: Optional[str] = None,
    brush: Optional[str] = None,
    inline: bool = False,
) -> Tag:
    """Image placeholder, sized like ``plot_output``."""
    return _graphic_output(
        output_id, OutputKind.IMAGE, "shiny-image-output", width, height, click, dblclick, hover, brush, inline
    )


def ui_output(output_id: str, inline: bool = False, container: Optional[str] = None) -> Tag:
    """Placeholder for markup generated by the application."""
    validate_id(output_id, "output")
    name = container or ("span" if inline else "div")
    return _placeholder(output_id, name, OutputKind.UI, class_="shiny-html-output")


html_output = ui_output


def download_button(
    output_id: str,
    label: Any = "Download",
    class_: Optional[str] = None,
    icon: Optional[Tag] = None,
) -> Tag:
    """Button that downloads a file produced by the application."""
    validate_id(output_id, "output")
    if icon is None:
        icon = make_icon("download")
    tag = Tag(
        "a",
        icon,
        label,
        id=output_id,
        class_=["btn", "btn-default", "shiny-download-link", class_],
        href="",
        target="_blank",
        download=True,
    )
    return tag.bind(BindingKind.OUTPUT, output_id, OutputKind.DOWNLOAD)


def download_link(output_id: str, label: Any = "Download", class_: Optional[str] = None) -> Tag:
    """Plain link that downloads a file produced by the application."""
    validate_id(output_id, "output")
    tag = Tag(
        "a",
        label,
        id=output_id,
        class_=["shiny-download-link", class_],
        href="",
        target="_blank",
        download=True,
    )
    return tag.bind(BindingKind.OUTPUT, output_id, OutputKind.DOWNLOAD)
