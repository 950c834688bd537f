"""
Unit Tests for HTML Generator
=============================

Unit tests for document generation: head assets, themes, titles, id checks
and writing documents to disk.
"""

import pytest

from widgetry.core import inputs, layouts, outputs
from widgetry.core.exceptions import HTMLGenerationError
from widgetry.core.render import fill_outputs, render_print
from widgetry.core.rendering.html_generator import (
    BaseHTMLGenerator,
    HTMLGeneratorFactory,
    Jinja2HTMLGenerator,
    generate_html,
    save_html,
)
from widgetry.core.tags import TagList
from widgetry.core.themes import bs_theme
from widgetry.models.schemas import RenderOptions

from tests.utils.assertions import (
    assert_appears_once,
    assert_html_contains,
    assert_valid_html_content,
)

JQUERY_JS = "https://cdn.jsdelivr.net/npm/jquery@3.6.0/dist/jquery.min.js"
BOOTSTRAP_CSS = "https://cdn.jsdelivr.net/npm/bootstrap@3.4.1/dist/css/bootstrap.min.css"
BOOTSTRAP_JS = "https://cdn.jsdelivr.net/npm/bootstrap@3.4.1/dist/js/bootstrap.min.js"


class TestBaseHTMLGenerator:
    """Test base HTML generator abstract class."""

    def test_base_html_generator_is_abstract(self):
        """Test that BaseHTMLGenerator cannot be instantiated."""
        with pytest.raises(TypeError):
            BaseHTMLGenerator()

    def test_generate_must_be_implemented(self):
        """Test that generate method is abstract."""

        class ConcreteGenerator(BaseHTMLGenerator):
            pass

        with pytest.raises(TypeError):
            ConcreteGenerator()


class TestJinja2HTMLGenerator:
    """Test Jinja2-based HTML generator."""

    @pytest.fixture
    def generator(self):
        """Create Jinja2 HTML generator instance."""
        return Jinja2HTMLGenerator()

    @pytest.mark.asyncio
    async def test_generate_document(self, generator, sample_page, render_options):
        """Test a complete document with head assets and body."""
        html = await generator.generate(sample_page, render_options)
        assert_valid_html_content(html)
        assert_html_contains(
            html,
            [
                '<html lang="en">',
                '<meta charset="utf-8"/>',
                '<meta name="viewport" content="width=device-width, initial-scale=1" />',
                "<title>Hello Shiny!</title>",
                f'<script src="{JQUERY_JS}"></script>',
                f'<link href="{BOOTSTRAP_CSS}" rel="stylesheet"/>',
                f'<script src="{BOOTSTRAP_JS}"></script>',
                "ion.rangeSlider.min.js",
                "selectize.min.js",
            ],
        )
        assert html.rstrip().endswith("</html>")

    @pytest.mark.asyncio
    async def test_dependency_order(self, generator, sample_page):
        """Test jQuery loads before Bootstrap and before the widgets that need it."""
        html = await generator.generate(sample_page)
        assert html.index(JQUERY_JS) < html.index(BOOTSTRAP_CSS) < html.index(BOOTSTRAP_JS)
        assert html.index(BOOTSTRAP_JS) < html.index("ion.rangeSlider.min.js")
        assert html.index("</head>") < html.index('<div class="container-fluid">')

    @pytest.mark.asyncio
    async def test_dependencies_appear_once(self, generator):
        """Test dependencies shared by several controls are emitted once."""
        page = layouts.fluid_page(
            inputs.slider_input("a", "A", min=0, max=10, value=5),
            inputs.slider_input("b", "B", min=0, max=10, value=5),
            layouts.fluid_page(outputs.text_output("inner")),
        )
        html = await generator.generate(page)
        assert_appears_once(html, "ion.rangeSlider.min.js")
        assert_appears_once(html, JQUERY_JS)
        assert_appears_once(html, 'name="viewport"')

    @pytest.mark.asyncio
    async def test_title_and_language(self, generator):
        """Test title and language come from the page or the options."""
        page = layouts.fluid_page(outputs.text_output("x"), title="A & B", lang="de")
        html = await generator.generate(page)
        assert "<title>A &amp; B</title>" in html
        assert '<html lang="de">' in html

        html = await generator.generate(page, RenderOptions(title="Report", lang="fr"))
        assert "<title>Report</title>" in html
        assert '<html lang="fr">' in html

    @pytest.mark.asyncio
    async def test_no_title(self, generator):
        """Test pages without a title omit the title element."""
        html = await generator.generate(layouts.fluid_page(outputs.text_output("x")))
        assert "<title>" not in html

    @pytest.mark.asyncio
    async def test_language_from_settings(self, generator, test_settings):
        """Test the configured language is the default."""
        test_settings.html_lang = "es"
        html = await generator.generate(layouts.fluid_page())
        assert '<html lang="es">' in html

    @pytest.mark.asyncio
    async def test_bootswatch_theme(self, generator):
        """Test bootswatch themes replace the stock Bootstrap stylesheet."""
        page = layouts.fluid_page(outputs.text_output("x"), theme="darkly")
        html = await generator.generate(page)
        assert '<link href="https://cdn.jsdelivr.net/npm/bootswatch@3.4.1/darkly/bootstrap.min.css"' in html
        assert BOOTSTRAP_CSS not in html
        assert_appears_once(html, BOOTSTRAP_JS)

    @pytest.mark.asyncio
    async def test_stylesheet_theme(self, generator):
        """Test stylesheet themes keep Bootstrap's scripts and add their own CSS."""
        page = layouts.fluid_page(inputs.select_input("s", "S", ["a", "b"]), theme="www/brand.css")
        html = await generator.generate(page)
        assert '<link href="www/brand.css" rel="stylesheet"/>' in html
        assert BOOTSTRAP_CSS not in html
        assert html.index(BOOTSTRAP_JS) < html.index("www/brand.css") < html.index("selectize.min.js")

    @pytest.mark.asyncio
    async def test_default_theme_from_settings(self, generator, test_settings):
        """Test the configured default theme applies to pages built without one."""
        test_settings.default_theme = "united"
        html = await generator.generate(layouts.fluid_page(outputs.text_output("x")))
        assert "bootswatch@3.4.1/united/bootstrap.min.css" in html

    @pytest.mark.asyncio
    async def test_custom_theme_css(self, generator):
        """Test custom themes add their CSS to the head."""
        theme = bs_theme(bg="#202123", fg="#B8BCC2", primary="#EA80FC")
        html = await generator.generate(layouts.fluid_page(outputs.text_output("x"), theme=theme))
        assert "<style>" in html
        assert "--color-primary: #EA80FC;" in html
        assert html.index("--color-primary") < html.index("</head>")
        assert BOOTSTRAP_CSS in html

    @pytest.mark.asyncio
    async def test_theme_css_stays_inside_style(self, generator):
        """Test custom theme CSS cannot end the style element early."""
        theme = bs_theme(primary="#123456", css="p { margin: 0; }</style><script>alert(1)</script>")
        html = await generator.generate(layouts.fluid_page(outputs.text_output("x"), theme=theme))
        assert "</style><script>" not in html
        assert "alert(1)<\\/script>" in html

    @pytest.mark.asyncio
    async def test_cdn_base_url(self, generator):
        """Test assets can be served from another CDN."""
        page = layouts.fluid_page(outputs.text_output("x"), theme="flatly")
        html = await generator.generate(page, RenderOptions(cdn_base_url="https://assets.example.com/npm/"))
        assert "https://assets.example.com/npm/jquery@3.6.0/dist/jquery.min.js" in html
        assert "https://assets.example.com/npm/bootswatch@3.4.1/flatly/bootstrap.min.css" in html
        assert "cdn.jsdelivr.net" not in html

    @pytest.mark.asyncio
    async def test_without_dependencies(self, generator, sample_page):
        """Test dependencies can be left out."""
        html = await generator.generate(sample_page, RenderOptions(include_dependencies=False))
        assert_valid_html_content(html)
        assert "<link" not in html
        assert "jquery.min.js" not in html
        assert 'name="viewport"' not in html

    @pytest.mark.asyncio
    async def test_duplicate_ids(self, generator):
        """Test pages binding one id twice are rejected unless checks are off."""
        page = layouts.fluid_page(inputs.text_input("x", "X"), outputs.text_output("x"))
        with pytest.raises(HTMLGenerationError, match="Duplicate id 'x'"):
            await generator.generate(page)
        html = await generator.generate(page, RenderOptions(check_ids=False))
        assert_valid_html_content(html)

    @pytest.mark.asyncio
    async def test_fill_page(self, generator):
        """Test fill pages stretch the body to the window."""
        html = await generator.generate(layouts.fill_page(outputs.plot_output("p", height="100%")))
        assert "<style>html, body { height: 100%; margin: 0; }</style>" in html

    @pytest.mark.asyncio
    async def test_pretty_and_compact(self, generator, sample_page):
        """Test indentation follows the options."""
        html = await generator.generate(sample_page)
        assert '<div class="container-fluid">\n  <h2>Hello Shiny!</h2>' in html
        html = await generator.generate(sample_page, RenderOptions(pretty=False))
        assert '<div class="container-fluid"><h2>Hello Shiny!</h2>' in html

    @pytest.mark.asyncio
    async def test_extra_head(self, generator, sample_page):
        """Test raw markup can be added to the head."""
        favicon = '<link rel="icon" href="favicon.ico"/>'
        html = await generator.generate(sample_page, RenderOptions(extra_head=[favicon]))
        assert html.index(favicon) < html.index("</head>")

    @pytest.mark.asyncio
    async def test_tag_list(self, generator):
        """Test tag lists render without a page container."""
        html = await generator.generate(TagList(outputs.text_output("a"), outputs.text_output("b")))
        assert_valid_html_content(html)
        assert '<div id="a" class="shiny-text-output"></div>' in html
        assert '<div id="b" class="shiny-text-output"></div>' in html

    @pytest.mark.asyncio
    async def test_filled_page(self, generator, sample_page):
        """Test rendered values appear in the document."""
        filled = fill_outputs(sample_page, {"summary": render_print("Min. 1st Qu. Median")})
        html = await generator.generate(filled)
        assert ">Min. 1st Qu. Median</pre>" in html

    @pytest.mark.asyncio
    async def test_rejects_non_tags(self, generator):
        """Test only tags can be rendered."""
        with pytest.raises(HTMLGenerationError, match="Expected a Tag or TagList, got str"):
            await generator.generate("<p>hello</p>")


class TestHTMLGeneratorFactory:
    """Test HTML generator factory."""

    def test_create_jinja2_generator(self):
        """Test creating the Jinja2 generator."""
        assert isinstance(HTMLGeneratorFactory.create_generator("jinja2"), Jinja2HTMLGenerator)
        assert isinstance(HTMLGeneratorFactory.create_generator(), Jinja2HTMLGenerator)

    def test_create_unknown_generator(self):
        """Test unknown generator types."""
        with pytest.raises(ValueError, match="Unsupported generator type: react"):
            HTMLGeneratorFactory.create_generator("react")


class TestGenerateFunctions:
    """Test module level helpers."""

    @pytest.mark.asyncio
    async def test_generate_html(self, sample_page):
        """Test the convenience function."""
        html = await generate_html(sample_page)
        assert_valid_html_content(html)

    @pytest.mark.asyncio
    async def test_save_html(self, sample_page, temp_dir):
        """Test documents are written as UTF-8, creating parent directories."""
        target = temp_dir / "site" / "app.html"
        path = await save_html(sample_page, target, RenderOptions(title="Café"))
        assert path == target
        content = target.read_text(encoding="utf-8")
        assert_valid_html_content(content)
        assert "<title>Café</title>" in content
