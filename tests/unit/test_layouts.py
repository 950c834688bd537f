"""
Unit Tests for Layout Functions
===============================

Tests for pages, the grid, the sidebar layout and tabsets.
"""

import pytest

from widgetry.core.exceptions import InvalidArgumentError, InvalidIdError, ThemeError
from widgetry.core.inputs import slider_input
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
from widgetry.core.outputs import plot_output, text_output
from widgetry.core.tags import collect_dependencies, div
from widgetry.core.themes import bs_theme
from widgetry.models.schemas import BindingKind

from tests.utils.assertions import assert_has_classes, find_by_name


class TestPages:
    """Test page constructors."""

    def test_fluid_page(self):
        """Test fluid pages use a full width container and attach Bootstrap."""
        page = fluid_page(title_panel("Hello Shiny!"), div("content"))
        assert page.name == "div"
        assert_has_classes(page, "container-fluid")
        assert page.metadata["page"] is True
        assert page.metadata["title"] == "Hello Shiny!"
        assert [d.name for d in collect_dependencies(page)] == ["jquery", "bootstrap"]

    def test_explicit_title_wins(self):
        """Test title= overrides the title panel's window title."""
        page = fluid_page(title_panel("Heading", window_title="Window"), title="Explicit")
        assert page.metadata["title"] == "Explicit"
        assert fluid_page(title_panel("Heading", window_title="Window")).metadata["title"] == "Window"

    def test_fixed_page(self):
        """Test fixed pages use the fixed width container."""
        page = fixed_page(div("content"), lang="de")
        assert_has_classes(page, "container")
        assert page.metadata["lang"] == "de"
        assert page.metadata["title"] is None

    def test_fill_page(self):
        """Test fill pages stretch to the window with optional padding."""
        page = fill_page(plot_output("plot", height="100%"), padding=[10, "5%"])
        assert_has_classes(page, "fill-page")
        assert page.attrs["style"] == "padding: 10px 5%; height: 100%; width: 100%;"
        assert page.metadata["fill"] is True

    def test_fill_page_padding_values(self):
        """Test padding takes one to four values."""
        with pytest.raises(InvalidArgumentError):
            fill_page(padding=[1, 2, 3, 4, 5])

    def test_page_theme_by_name(self):
        """Test theme names resolve to registered themes."""
        page = fluid_page(theme="darkly")
        assert page.metadata["theme"].bootswatch == "darkly"

    def test_page_theme_object_and_stylesheet(self):
        """Test themes may be objects or stylesheet paths."""
        theme = bs_theme(bg="#101010", fg="#FDF7F7")
        assert fluid_page(theme=theme).metadata["theme"] is theme
        assert fluid_page(theme="www/bootstrap.css").metadata["theme"].stylesheet == "www/bootstrap.css"

    def test_page_unknown_theme(self):
        """Test unknown theme names are rejected."""
        with pytest.raises(ThemeError):
            fluid_page(theme="neon")

    def test_title_panel(self):
        """Test title panels are level two headings."""
        heading = title_panel("Hello")
        assert heading.render() == "<h2>Hello</h2>"
        assert heading.metadata["window_title"] == "Hello"


class TestGrid:
    """Test rows and columns."""

    def test_rows(self):
        """Test fluid and fixed rows."""
        assert fluid_row().attrs["class"] == "row"
        assert fixed_row().attrs["class"] == "row"

    def test_column(self):
        """Test column width classes."""
        assert column(4, "a").render() == '<div class="col-sm-4">a</div>'

    def test_column_offset(self):
        """Test column offsets."""
        tag = column(4, offset=2)
        assert tag.attrs["class"] == "col-sm-4 offset-md-2 col-sm-offset-2"

    @pytest.mark.parametrize(
        "width,offset",
        [(0, 0), (13, 0), ("4", 0), (4, -1), (4, 12), (8, 5), (True, 0)],
    )
    def test_column_range_checks(self, width, offset):
        """Test widths and offsets must fit the 12 column grid."""
        with pytest.raises(InvalidArgumentError):
            column(width, offset=offset)

    def test_well_panel(self):
        """Test wells."""
        assert well_panel("x").render() == '<div class="well">x</div>'

    def test_grid_composition(self):
        """Test rows of columns holding controls."""
        row = fluid_row(
            column(4, slider_input("n", "N", 1, 10, 5)),
            column(8, plot_output("plot")),
        )
        assert [c.attrs["class"] for c in row.children] == ["col-sm-4", "col-sm-8"]
        assert row.find("plot") is not None


class TestSidebarLayout:
    """Test the sidebar layout."""

    def test_sidebar_layout(self):
        """Test the sidebar is a well on the left of the main panel."""
        layout = sidebar_layout(
            sidebar_panel(slider_input("obs", "Observations", 1, 100, 50)),
            main_panel(plot_output("dist_plot")),
        )
        assert_has_classes(layout, "row")
        sidebar, main = layout.children
        assert_has_classes(sidebar, "col-sm-4")
        form = sidebar.children[0]
        assert form.name == "form"
        assert_has_classes(form, "well")
        assert form.attrs["role"] == "complementary"
        assert_has_classes(main, "col-sm-8")
        assert main.attrs["role"] == "main"

    def test_sidebar_layout_right(self):
        """Test the sidebar can be placed on the right."""
        layout = sidebar_layout(sidebar_panel(width=3), main_panel(width=9), position="right")
        assert [c.attrs["class"] for c in layout.children] == ["col-sm-9", "col-sm-3"]

    def test_sidebar_layout_requires_panels(self):
        """Test plain tags are not accepted as panels."""
        with pytest.raises(InvalidArgumentError):
            sidebar_layout(div(), main_panel())
        with pytest.raises(InvalidArgumentError):
            sidebar_layout(sidebar_panel(), sidebar_panel())
        with pytest.raises(InvalidArgumentError):
            sidebar_layout(sidebar_panel(), main_panel(), position="top")

    def test_panel_width_checks(self):
        """Test panel widths are grid widths."""
        with pytest.raises(InvalidArgumentError):
            sidebar_panel(width=13)


class TestTabsets:
    """Test tabset, navlist and navbar pages."""

    def test_tab_panel(self):
        """Test tab panels default their value to the title."""
        tab = tab_panel("Plot", plot_output("plot"))
        assert_has_classes(tab, "tab-pane")
        assert tab.metadata["tab_value"] == "Plot"
        assert tab_panel("Plot", value="p").metadata["tab_value"] == "p"

    def test_tab_panel_needs_value_for_rich_title(self):
        """Test non-string titles need an explicit value."""
        with pytest.raises(InvalidArgumentError):
            tab_panel(div("Plot"))

    def test_tabset_panel(self):
        """Test nav list entries and panes for each tab."""
        tabset = tabset_panel(
            tab_panel("Plot", plot_output("plot")),
            tab_panel("Summary", text_output("summary")),
            tab_panel("Table"),
        )
        assert_has_classes(tabset, "tabbable")
        nav, content = tabset.children
        assert nav.attrs["class"] == "nav nav-tabs"
        number = nav.attrs["data-tabsetid"]
        assert content.attrs["data-tabsetid"] == number

        items = nav.children
        assert [li.attrs.get("class") for li in items] == ["active", None, None]
        links = [li.children[0] for li in items]
        assert [a.attrs["href"] for a in links] == [f"#tab-{number}-{i}" for i in (1, 2, 3)]
        assert all(a.attrs["data-toggle"] == "tab" for a in links)
        assert [a.attrs["data-value"] for a in links] == ["Plot", "Summary", "Table"]

        panes = content.children
        assert [p.attrs["id"] for p in panes] == [f"tab-{number}-{i}" for i in (1, 2, 3)]
        assert panes[0].attrs["class"] == "tab-pane active"
        assert panes[1].attrs["class"] == "tab-pane"
        assert panes[1].find("summary") is not None

    def test_tabset_selected_and_id(self):
        """Test selecting a tab and binding the tabset as an input."""
        tabset = tabset_panel(tab_panel("A"), tab_panel("B"), id="tabs", selected="B", type="pills")
        nav = tabset.children[0]
        assert nav.attrs["id"] == "tabs"
        assert nav.attrs["class"] == "nav nav-pills shiny-tab-input"
        assert nav.binding.kind == BindingKind.INPUT
        assert nav.children[1].attrs["class"] == "active"
        assert nav.children[0].children[0].attrs["data-toggle"] == "pill"

    def test_tabset_with_menu(self):
        """Test navbar menus become drop-downs."""
        tabset = tabset_panel(
            tab_panel("Home"),
            navbar_menu("More", tab_panel("Sub A"), tab_panel("Sub B")),
            selected="Sub B",
        )
        nav, content = tabset.children
        dropdown = nav.children[1]
        assert_has_classes(dropdown, "dropdown", "active")
        toggle, menu = dropdown.children
        assert toggle.attrs["data-toggle"] == "dropdown"
        assert toggle.attrs["data-value"] == "More"
        assert menu.attrs["class"] == "dropdown-menu"
        assert [li.attrs.get("class") for li in menu.children] == [None, "active"]
        assert len(content.children) == 3

    def test_tabsets_get_distinct_numbers(self):
        """Test tabsets and their menus never share pane ids."""
        tabsets = [
            tabset_panel(tab_panel("A"), navbar_menu("More", tab_panel("B")))
            for _ in range(50)
        ]
        numbers = [tabset.children[0].attrs["data-tabsetid"] for tabset in tabsets]
        assert len(set(numbers)) == len(numbers)
        pane_ids = [
            pane.attrs["id"]
            for tabset in tabsets
            for pane in tabset.children[1].children
        ]
        assert len(set(pane_ids)) == len(pane_ids)

    @pytest.mark.parametrize(
        "kwargs",
        [{"selected": "Missing"}, {"type": "cards"}, {"id": "my-tabs"}],
    )
    def test_tabset_rejects_bad_arguments(self, kwargs):
        """Test unknown selections, types and invalid ids."""
        with pytest.raises(InvalidArgumentError):
            tabset_panel(tab_panel("A"), **kwargs)

    def test_tabset_rejects_duplicates_and_non_tabs(self):
        """Test tab values are unique and children are tab panels."""
        with pytest.raises(InvalidArgumentError):
            tabset_panel(tab_panel("A"), tab_panel("A"))
        with pytest.raises(InvalidArgumentError):
            tabset_panel(div("not a tab"))
        with pytest.raises(InvalidIdError):
            tabset_panel(tab_panel("A"), id="bad id")

    def test_tabset_does_not_modify_tab_panels(self):
        """Test panes are copies of the given tab panels."""
        tab = tab_panel("A")
        tabset_panel(tab)
        assert "id" not in tab.attrs

    def test_navlist_panel(self):
        """Test navlists put stacked pills in a well beside the content."""
        navlist = navlist_panel("Header", tab_panel("First"), tab_panel("Second"), widths=(3, 9))
        assert_has_classes(navlist, "row")
        left, right = navlist.children
        assert left.attrs["class"] == "col-sm-3"
        assert right.attrs["class"] == "col-sm-9"
        well = left.children[0]
        assert_has_classes(well, "well")
        nav = well.children[0]
        assert nav.attrs["class"] == "nav nav-pills nav-stacked"
        header = nav.children[0]
        assert header.attrs["class"] == "navbar-brand"
        assert header.children == ["Header"]
        assert_has_classes(right.children[0], "tab-content")

    def test_navlist_widths(self):
        """Test navlist widths fit the grid."""
        with pytest.raises(InvalidArgumentError):
            navlist_panel(tab_panel("A"), widths=(6, 7))
        with pytest.raises(InvalidArgumentError):
            navlist_panel(tab_panel("A"), widths=(12,))

    def test_navbar_page(self):
        """Test navbar pages have a navigation bar and tab content."""
        page = navbar_page(
            "My Application",
            tab_panel("Component 1"),
            tab_panel("Component 2"),
            inverse=True,
            theme="flatly",
        )
        assert page.metadata["page"] is True
        assert page.metadata["title"] == "My Application"
        assert page.metadata["theme"].name == "flatly"
        bar = find_by_name(page, "nav")[0]
        assert_has_classes(bar, "navbar", "navbar-inverse", "navbar-static-top")
        brand = page.find_all(lambda t: t.has_class("navbar-brand"))[0]
        assert brand.children == ["My Application"]
        nav = find_by_name(page, "ul")[0]
        assert nav.attrs["class"] == "nav navbar-nav"
        content = page.find_all(lambda t: t.has_class("tab-content"))[0]
        assert len(content.children) == 2

    def test_navbar_page_collapsible(self):
        """Test collapsible navbars get a toggle button."""
        page = navbar_page("App", tab_panel("One"), collapsible=True, position="fixed-top", fluid=False)
        toggle = page.find_all(lambda t: t.has_class("navbar-toggle"))[0]
        target = toggle.attrs["data-target"]
        collapse = page.find(target[1:])
        assert collapse is not None
        assert_has_classes(collapse, "navbar-collapse", "collapse")
        assert page.find_all(lambda t: t.has_class("navbar-fixed-top"))

    def test_navbar_page_position(self):
        """Test navbar positions are checked."""
        with pytest.raises(InvalidArgumentError):
            navbar_page("App", tab_panel("One"), position="middle")
