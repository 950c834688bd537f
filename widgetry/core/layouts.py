"""
Layout Functions
================

Composition helpers that arrange inputs and outputs into a page: page
containers, the Bootstrap 12-column grid, the sidebar layout and tabbed
navigation (tabsets, navlists and navbar pages).
"""

import itertools
import random
from typing import Any, Iterable, List, Optional, Sequence, Tuple, Union

from widgetry.core.css import validate_css_unit
from widgetry.core.dependencies import page_dependencies
from widgetry.core.exceptions import InvalidArgumentError
from widgetry.core.ids import validate_id
from widgetry.core.tags import Tag, TagList, a, b, div, h2, li, span, ul
from widgetry.core.themes import ThemeLike, resolve_theme
from widgetry.models.schemas import BindingKind

TABSET_TYPES = ("tabs", "pills", "hidden")
NAVBAR_POSITIONS = ("static-top", "fixed-top", "fixed-bottom")
SIDEBAR_POSITIONS = ("left", "right")


# Pages --------------------------------------------------------------------

def _window_title(children: Iterable[Any]) -> Optional[str]:
    for root in TagList(*children):
        if not isinstance(root, Tag):
            continue
        for tag in root.walk():
            if tag.metadata.get("window_title"):
                return tag.metadata["window_title"]
    return None


def _make_page(
    container: Tag,
    children: Sequence[Any],
    title: Optional[str],
    theme: ThemeLike,
    lang: Optional[str],
    **metadata: Any,
) -> Tag:
    container.add_dependency(*page_dependencies())
    container.metadata.update(
        page=True,
        title=title or _window_title(children),
        theme=resolve_theme(theme),
        lang=lang,
        **metadata,
    )
    return container


def fluid_page(
    *children: Any,
    title: Optional[str] = None,
    theme: ThemeLike = None,
    lang: Optional[str] = None,
) -> Tag:
    """
    Page whose content stretches to the full browser width.

    Attaches jQuery and Bootstrap; ``theme`` takes a Theme, a theme name or
    a stylesheet path.
    """
    return _make_page(div(*children, class_="container-fluid"), children, title, theme, lang)


def fixed_page(
    *children: Any,
    title: Optional[str] = None,
    theme: ThemeLike = None,
    lang: Optional[str] = None,
) -> Tag:
    """Page with a fixed maximum width (940px on most displays)."""
    return _make_page(div(*children, class_="container"), children, title, theme, lang)


def fill_page(
    *children: Any,
    padding: Union[int, str, Sequence[Union[int, str]]] = 0,
    title: Optional[str] = None,
    theme: ThemeLike = None,
    lang: Optional[str] = None,
) -> Tag:
    """Page whose body fills the browser window; children can use percentage heights."""
    values = list(padding) if isinstance(padding, (list, tuple)) else [padding]
    if not 1 <= len(values) <= 4:
        raise InvalidArgumentError("fill_page padding takes one to four values")
    padding_css = " ".join(validate_css_unit(v) for v in values)
    container = div(*children, class_="fill-page", style=f"padding: {padding_css}; height: 100%; width: 100%;")
    return _make_page(container, children, title, theme, lang, fill=True)


def title_panel(title: Any, window_title: Optional[str] = None) -> Tag:
    """Page heading; also provides the browser window title."""
    heading = h2(title)
    heading.metadata["window_title"] = window_title or (title if isinstance(title, str) else None)
    return heading


# Grid ---------------------------------------------------------------------

def _check_width(width: Any, name: str = "width", low: int = 1) -> int:
    if not isinstance(width, int) or isinstance(width, bool) or not low <= width <= 12:
        raise InvalidArgumentError(f"Column {name} must be an integer between {low} and 12, got {width!r}")
    return width


def fluid_row(*children: Any) -> Tag:
    """Row of columns in a fluid page."""
    return div(*children, class_="row")


def fixed_row(*children: Any) -> Tag:
    """Row of columns in a fixed page."""
    return div(*children, class_="row")


def column(width: int, *children: Any, offset: int = 0) -> Tag:
    """
    Column of a row on the 12-unit Bootstrap grid.

    Raises:
        InvalidArgumentError: If width is not in 1..12, offset not in 0..11,
            or together they exceed the 12 units of a row
    """
    _check_width(width)
    if not isinstance(offset, int) or isinstance(offset, bool) or not 0 <= offset <= 11:
        raise InvalidArgumentError(f"Column offset must be an integer between 0 and 11, got {offset!r}")
    if width + offset > 12:
        raise InvalidArgumentError(f"Column width ({width}) plus offset ({offset}) exceeds 12")

    classes = [f"col-sm-{width}"]
    if offset:
        classes.extend([f"offset-md-{offset}", f"col-sm-offset-{offset}"])
    return div(*children, class_=classes)


def well_panel(*children: Any) -> Tag:
    """Panel with an inset border and grey background."""
    return div(*children, class_="well")


# Sidebar layout -----------------------------------------------------------

def sidebar_panel(*children: Any, width: int = 4) -> Tag:
    """Sidebar for inputs, shown as a grey well."""
    _check_width(width)
    panel = div(Tag("form", *children, class_="well", role="complementary"), class_=f"col-sm-{width}")
    panel.metadata["layout_role"] = "sidebar"
    return panel


def main_panel(*children: Any, width: int = 8) -> Tag:
    """Main area of a sidebar layout, usually holding outputs."""
    _check_width(width)
    panel = div(*children, class_=f"col-sm-{width}", role="main")
    panel.metadata["layout_role"] = "main"
    return panel


def sidebar_layout(
    sidebar_panel: Tag,
    main_panel: Tag,
    position: str = "left",
    fluid: bool = True,
) -> Tag:
    """
    Two column layout: a sidebar of inputs beside the main panel.

    Raises:
        InvalidArgumentError: If the panels were not made with sidebar_panel
            and main_panel, or the position is not left/right
    """
    if position not in SIDEBAR_POSITIONS:
        raise InvalidArgumentError(f"sidebar_layout position must be 'left' or 'right', got '{position}'")
    if not isinstance(sidebar_panel, Tag) or sidebar_panel.metadata.get("layout_role") != "sidebar":
        raise InvalidArgumentError("sidebar_layout expects a sidebar_panel() as its first argument")
    if not isinstance(main_panel, Tag) or main_panel.metadata.get("layout_role") != "main":
        raise InvalidArgumentError("sidebar_layout expects a main_panel() as its second argument")

    panels = [sidebar_panel, main_panel] if position == "left" else [main_panel, sidebar_panel]
    return fluid_row(*panels) if fluid else fixed_row(*panels)


# Tabs ---------------------------------------------------------------------

class NavMenu:
    """Drop-down menu of tab panels inside a tabset or navbar."""

    def __init__(self, title: Any, tabs: Sequence[Tag], menu_name: Optional[str] = None, icon: Optional[Tag] = None):
        self.title = title
        self.tabs = list(tabs)
        self.menu_name = menu_name or (title if isinstance(title, str) else None)
        self.icon = icon

    def __repr__(self) -> str:
        return f"<NavMenu {self.menu_name!r} tabs={len(self.tabs)}>"


def tab_panel(title: Any, *children: Any, value: Optional[str] = None, icon: Optional[Tag] = None) -> Tag:
    """One tab of a tabset_panel, navlist_panel or navbar_page."""
    if value is None and not isinstance(title, str):
        raise InvalidArgumentError("tab_panel needs a value when its title is not a string")
    pane = div(*children, class_="tab-pane", title=title if isinstance(title, str) else None)
    pane.metadata.update(tab_title=title, tab_value=value if value is not None else title, tab_icon=icon)
    return pane


def navbar_menu(title: Any, *tabs: Tag, menu_name: Optional[str] = None, icon: Optional[Tag] = None) -> NavMenu:
    """Group tab panels under a drop-down entry."""
    for tab in tabs:
        _check_tab(tab)
    return NavMenu(title, tabs, menu_name=menu_name, icon=icon)


def _check_tab(item: Any) -> None:
    if not isinstance(item, Tag) or "tab_value" not in item.metadata:
        raise InvalidArgumentError(f"Expected a tab_panel(), got {item!r}")


# Counts up from a random four digit start; numbers never repeat in a process
_tabset_ids = itertools.count(random.randint(1000, 9999))


def _next_tabset_id() -> int:
    return next(_tabset_ids)


def _tab_values(items: Sequence[Any]) -> List[str]:
    values: List[str] = []
    for item in items:
        if isinstance(item, NavMenu):
            values.extend(tab.metadata["tab_value"] for tab in item.tabs)
        elif isinstance(item, Tag):
            values.append(item.metadata["tab_value"])
    return values


def _build_tabset(
    items: Sequence[Any],
    ul_class: str,
    toggle: str,
    tabset_id: Optional[str],
    selected: Optional[str],
    allow_headers: bool = False,
) -> Tuple[Tag, List[Tag]]:
    for item in items:
        if isinstance(item, str) and allow_headers:
            continue
        if not isinstance(item, NavMenu):
            _check_tab(item)

    values = _tab_values(items)
    duplicates = sorted({v for v in values if values.count(v) > 1})
    if duplicates:
        raise InvalidArgumentError(f"Tab values must be unique; duplicated: {', '.join(duplicates)}")
    if selected is not None and selected not in values:
        raise InvalidArgumentError(f"selected tab '{selected}' is not one of: {', '.join(values)}")
    active = selected if selected is not None else (values[0] if values else None)

    number = _next_tabset_id()
    nav = ul(class_=ul_class, data_tabsetid=str(number))
    if tabset_id is not None:
        validate_id(tabset_id)
        nav.set_attrs(id=tabset_id).add_class("shiny-tab-input")
        nav.bind(BindingKind.INPUT, tabset_id)

    panes: List[Tag] = []

    def add_tab(tab: Tag, container: Tag, group: int, index: int) -> None:
        value = tab.metadata["tab_value"]
        pane_id = f"tab-{group}-{index}"
        is_active = value == active
        container.append(
            li(
                a(
                    tab.metadata.get("tab_icon"),
                    tab.metadata["tab_title"],
                    href=f"#{pane_id}",
                    data_toggle=toggle,
                    data_value=value,
                ),
                class_="active" if is_active else None,
            )
        )
        pane = tab.copy()
        pane.set_attrs(data_value=value, id=pane_id)
        if is_active:
            pane.add_class("active")
        panes.append(pane)

    index = 0
    for item in items:
        if isinstance(item, str):
            nav.append(li(item, class_="navbar-brand"))
        elif isinstance(item, NavMenu):
            menu_number = _next_tabset_id()
            menu_values = [tab.metadata["tab_value"] for tab in item.tabs]
            menu = ul(class_="dropdown-menu", data_tabsetid=str(menu_number))
            for position, tab in enumerate(item.tabs, start=1):
                add_tab(tab, menu, menu_number, position)
            nav.append(
                li(
                    a(
                        item.icon,
                        item.title,
                        b(class_="caret"),
                        href="#",
                        class_="dropdown-toggle",
                        data_toggle="dropdown",
                        data_value=item.menu_name,
                    ),
                    menu,
                    class_=["dropdown", "active" if active in menu_values else None],
                )
            )
        else:
            index += 1
            add_tab(item, nav, number, index)

    return nav, panes


def tabset_panel(
    *tabs: Any,
    id: Optional[str] = None,
    selected: Optional[str] = None,
    type: str = "tabs",
    header: Any = None,
    footer: Any = None,
) -> Tag:
    """
    Tabs or pills switching between tab panels; the first tab is shown unless
    ``selected`` names another. ``type="hidden"`` hides the tab strip.
    """
    if type not in TABSET_TYPES:
        raise InvalidArgumentError(f"tabset_panel type must be one of {TABSET_TYPES}, got '{type}'")
    toggle = "pill" if type == "pills" else "tab"
    nav, panes = _build_tabset(tabs, f"nav nav-{type}", toggle, id, selected)
    content = div(header, *panes, footer, class_="tab-content", data_tabsetid=nav.attrs["data-tabsetid"])
    return div(nav, content, class_="tabbable")


def navlist_panel(
    *items: Any,
    id: Optional[str] = None,
    selected: Optional[str] = None,
    well: bool = True,
    fluid: bool = True,
    widths: Tuple[int, int] = (4, 8),
) -> Tag:
    """
    Vertical list of tab titles beside the selected tab's content. Plain
    strings among the items become section headings.
    """
    if len(widths) != 2:
        raise InvalidArgumentError("navlist_panel widths takes two column widths")
    left, right = (_check_width(w, "widths") for w in widths)
    if left + right > 12:
        raise InvalidArgumentError(f"navlist_panel widths {widths} exceed 12 columns")

    nav, panes = _build_tabset(items, "nav nav-pills nav-stacked", "tab", id, selected, allow_headers=True)
    content = div(*panes, class_="tab-content", data_tabsetid=nav.attrs["data-tabsetid"])
    nav_column = column(left, div(nav, class_="well") if well else nav)
    row = fluid_row if fluid else fixed_row
    return row(nav_column, column(right, content))


def navbar_page(
    title: Any,
    *tabs: Any,
    id: Optional[str] = None,
    selected: Optional[str] = None,
    position: str = "static-top",
    header: Any = None,
    footer: Any = None,
    inverse: bool = False,
    collapsible: bool = False,
    fluid: bool = True,
    theme: ThemeLike = None,
    window_title: Optional[str] = None,
    lang: Optional[str] = None,
) -> Tag:
    """
    Page with a navigation bar across the top; each tab panel becomes its
    own page section and navbar_menu groups tabs into drop-downs.
    """
    if position not in NAVBAR_POSITIONS:
        raise InvalidArgumentError(f"navbar_page position must be one of {NAVBAR_POSITIONS}, got '{position}'")

    nav, panes = _build_tabset(tabs, "nav navbar-nav", "tab", id, selected)
    number = nav.attrs["data-tabsetid"]
    container_class = "container-fluid" if fluid else "container"

    brand = span(title, class_="navbar-brand")
    if collapsible:
        target = f"navbar-collapse-{number}"
        toggle = Tag(
            "button",
            span("Toggle navigation", class_="sr-only"),
            span(class_="icon-bar"),
            span(class_="icon-bar"),
            span(class_="icon-bar"),
            type="button",
            class_="navbar-toggle collapsed",
            data_toggle="collapse",
            data_target=f"#{target}",
        )
        header_div = div(toggle, brand, class_="navbar-header")
        menu: Any = div(nav, class_="navbar-collapse collapse", id=target)
    else:
        header_div = div(brand, class_="navbar-header")
        menu = nav

    bar = Tag(
        "nav",
        div(header_div, menu, class_=container_class),
        class_=["navbar", "navbar-inverse" if inverse else "navbar-default", f"navbar-{position}"],
        role="navigation",
    )
    content = div(
        header,
        div(*panes, class_="tab-content", data_tabsetid=number),
        footer,
        class_=container_class,
    )
    page_title = window_title or (title if isinstance(title, str) else None)
    return _make_page(div(bar, content, class_="navbar-page"), [], page_title, theme, lang)
