"""
The UI constructor catalogue in one namespace.

Example:
    >>> from widgetry import ui
    >>> page = ui.fluid_page(
    ...     ui.title_panel("Hello"),
    ...     ui.sidebar_layout(
    ...         ui.sidebar_panel(ui.slider_input("n", "Observations", 1, 100, 50)),
    ...         ui.main_panel(ui.plot_output("hist")),
    ...     ),
    ... )
"""

from widgetry.core.inputs import (
    action_button,
    action_link,
    checkbox_group_input,
    checkbox_input,
    date_input,
    date_range_input,
    file_input,
    icon,
    numeric_input,
    password_input,
    radio_buttons,
    select_input,
    slider_input,
    text_area_input,
    text_input,
)
from widgetry.core.layouts import (
    column,
    fill_page,
    fixed_page,
    fixed_row,
    fluid_page,
    fluid_row,
    main_panel,
    navbar_menu,
    navbar_page,
    navlist_panel,
    sidebar_layout,
    sidebar_panel,
    tab_panel,
    tabset_panel,
    title_panel,
    well_panel,
)
from widgetry.core.outputs import (
    data_table_output,
    download_button,
    download_link,
    html_output,
    image_output,
    plot_output,
    table_output,
    text_output,
    ui_output,
    verbatim_text_output,
)
from widgetry.core.tags import HTML, Tag, TagList, tags
from widgetry.core.themes import bs_theme

__all__ = [
    # Inputs
    "action_button",
    "action_link",
    "checkbox_group_input",
    "checkbox_input",
    "date_input",
    "date_range_input",
    "file_input",
    "icon",
    "numeric_input",
    "password_input",
    "radio_buttons",
    "select_input",
    "slider_input",
    "text_area_input",
    "text_input",
    # Outputs
    "data_table_output",
    "download_button",
    "download_link",
    "html_output",
    "image_output",
    "plot_output",
    "table_output",
    "text_output",
    "ui_output",
    "verbatim_text_output",
    # Layouts
    "column",
    "fill_page",
    "fixed_page",
    "fixed_row",
    "fluid_page",
    "fluid_row",
    "main_panel",
    "navbar_menu",
    "navbar_page",
    "navlist_panel",
    "sidebar_layout",
    "sidebar_panel",
    "tab_panel",
    "tabset_panel",
    "title_panel",
    "well_panel",
    # Tags and themes
    "HTML",
    "Tag",
    "TagList",
    "tags",
    "bs_theme",
]
