"""Rendering functions paired with the output placeholders."""

from widgetry.core.render import (
    fill_outputs,
    render_data_table,
    render_download,
    render_image,
    render_plot,
    render_print,
    render_table,
    render_text,
    render_ui,
)
from widgetry.models.schemas import RenderedOutput

# Short names matching the catalogue (render.text, render.plot, ...)
text = render_text
print_ = render_print
table = render_table
data_table = render_data_table
plot = render_plot
image = render_image
ui = render_ui
download = render_download

__all__ = [
    "RenderedOutput",
    "fill_outputs",
    "render_data_table",
    "render_download",
    "render_image",
    "render_plot",
    "render_print",
    "render_table",
    "render_text",
    "render_ui",
    "text",
    "print_",
    "table",
    "data_table",
    "plot",
    "image",
    "ui",
    "download",
]
