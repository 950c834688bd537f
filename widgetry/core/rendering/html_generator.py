"""
HTML Generator
==============

Turn a page built from the catalogue constructors into a complete HTML5
document: theme stylesheet, deduplicated CSS/JS dependencies, document
title and language.
"""

from typing import Dict, List, Any, Optional, Union
from pathlib import Path
import jinja2
from abc import ABC, abstractmethod
from markupsafe import Markup

from widgetry.config.logging import get_logger
from widgetry.config.settings import get_settings
from widgetry.core.dependencies import rebase_dependency
from widgetry.core.exceptions import HTMLGenerationError, WidgetryError
from widgetry.core.ids import check_unique_ids
from widgetry.core.tags import Tag, TagList, collect_dependencies
from widgetry.core.themes import resolve_theme, theme_dependencies
from widgetry.models.schemas import HTMLDependency, RenderOptions, Theme

logger = get_logger(__name__)

PageLike = Union[Tag, TagList]


class BaseHTMLGenerator(ABC):
    """Abstract base class for HTML generators."""

    @abstractmethod
    async def generate(self, page: PageLike, options: Optional[RenderOptions] = None) -> str:
        """Generate an HTML document from a page."""
        pass


class Jinja2HTMLGenerator(BaseHTMLGenerator):
    """Jinja2-based HTML generator implementation."""

    def __init__(self) -> None:
        self.settings = get_settings()
        self.logger: Any = logger.bind(generator="jinja2")  # structlog.BoundLoggerBase
        self._setup_jinja2_environment()

    def _setup_jinja2_environment(self) -> None:
        """Setup Jinja2 template environment."""
        template_dir = Path(__file__).parent / "templates"
        self.env = jinja2.Environment(
            loader=jinja2.FileSystemLoader(str(template_dir)),
            autoescape=jinja2.select_autoescape(["html", "xml"]),
            enable_async=True,
        )

        self._register_template_functions()

    def _register_template_functions(self) -> None:
        """Register custom Jinja2 functions."""

        def render_tag(node: PageLike) -> Markup:
            """Render the page body at the configured indentation."""
            return Markup(node.render(pretty=self._pretty, indent_width=self.settings.indent_width))

        self.env.globals["render_tag"] = render_tag
        self._pretty = self.settings.pretty_print

    async def generate(self, page: PageLike, options: Optional[RenderOptions] = None) -> str:
        """
        Generate a complete HTML document using Jinja2 templates.

        Args:
            page: Page (or any tag tree) built from the constructors
            options: Rendering options

        Returns:
            Generated HTML string

        Raises:
            HTMLGenerationError: If HTML generation fails
        """
        options = options or RenderOptions()
        try:
            self.logger.info("Generating HTML document")

            if not isinstance(page, (Tag, TagList)):
                raise HTMLGenerationError(f"Expected a Tag or TagList, got {type(page).__name__}")

            if options.check_ids:
                check_unique_ids(page)

            self._pretty = self.settings.pretty_print if options.pretty is None else options.pretty

            template = self.env.get_template("page.html")
            context = self._prepare_context(page, options)
            html = await template.render_async(**context)

            self.logger.info(
                "HTML generation completed",
                template="page.html",
                dependencies=len(context["dependencies"]),
                html_length=len(html),
            )

            return html

        except HTMLGenerationError as e:
            self.logger.error("HTML generation failed", error=str(e))
            raise
        except WidgetryError as e:
            # Page problems such as duplicate ids or unknown themes
            self.logger.error("HTML generation failed", error=str(e))
            raise HTMLGenerationError(str(e)) from e
        except jinja2.TemplateError as e:
            error_msg = f"Template rendering failed: {e}"
            self.logger.error("HTML generation failed", error=error_msg)
            raise HTMLGenerationError(error_msg) from e

    def _page_metadata(self, page: PageLike) -> Dict[str, Any]:
        if isinstance(page, Tag):
            return page.metadata
        for child in page:
            if isinstance(child, Tag) and child.metadata.get("page"):
                return child.metadata
        return {}

    def _prepare_context(self, page: PageLike, options: RenderOptions) -> Dict[str, Any]:
        """
        Prepare template rendering context.

        Args:
            page: Page to render
            options: Render options

        Returns:
            Template context dictionary
        """
        metadata = self._page_metadata(page)
        theme = self._resolve_theme(metadata)

        dependencies: List[HTMLDependency] = []
        if options.include_dependencies:
            dependencies = self._resolve_dependencies(page, theme, options)

        return {
            "page": page,
            "title": options.title or metadata.get("title"),
            "lang": options.lang or metadata.get("lang") or self.settings.html_lang,
            "dependencies": dependencies,
            "head_markup": [dep.head for dep in dependencies if dep.head],
            "theme_css": theme.to_css() if theme else "",
            "fill": bool(metadata.get("fill")),
            "extra_head": options.extra_head,
            "settings": self.settings,
        }

    def _resolve_theme(self, metadata: Dict[str, Any]) -> Optional[Theme]:
        if "theme" in metadata:
            theme = metadata["theme"]
            return theme if isinstance(theme, Theme) or theme is None else resolve_theme(theme)
        return resolve_theme(None)

    def _resolve_dependencies(
        self, page: PageLike, theme: Optional[Theme], options: RenderOptions
    ) -> List[HTMLDependency]:
        """Deduplicate dependencies and swap in the theme stylesheet."""
        dependencies = collect_dependencies(page)

        theme_deps = theme_dependencies(theme, options.cdn_base_url)
        names = {dep.name for dep in dependencies}
        replacements = {dep.name: dep for dep in theme_deps if dep.name in names}
        extras = [dep for dep in theme_deps if dep.name not in names]

        # Theme additions follow the dependency they replace
        resolved: List[HTMLDependency] = []
        for dep in dependencies:
            if dep.name in replacements:
                resolved.append(replacements.pop(dep.name))
                resolved.extend(extras)
                extras = []
            else:
                resolved.append(dep)
        resolved.extend(extras)
        dependencies = resolved

        if options.cdn_base_url:
            dependencies = [rebase_dependency(dep, options.cdn_base_url) for dep in dependencies]

        return dependencies


class HTMLGeneratorFactory:
    """Factory for creating HTML generators."""

    _generators = {
        "jinja2": Jinja2HTMLGenerator,
    }

    @classmethod
    def create_generator(cls, generator_type: str = "jinja2") -> BaseHTMLGenerator:
        """
        Create HTML generator instance.

        Args:
            generator_type: Type of generator

        Returns:
            HTML generator instance

        Raises:
            ValueError: If generator type is not supported
        """
        if generator_type not in cls._generators:
            raise ValueError(f"Unsupported generator type: {generator_type}")

        return cls._generators[generator_type]()


async def generate_html(
    page: PageLike, options: Optional[RenderOptions] = None, generator_type: str = "jinja2"
) -> str:
    """
    Generate a complete HTML document from a page.

    Args:
        page: Page built from the constructors
        options: Rendering options
        generator_type: HTML generator type

    Returns:
        Generated HTML string
    """
    generator = HTMLGeneratorFactory.create_generator(generator_type)
    return await generator.generate(page, options)


async def save_html(
    page: PageLike, path: Union[str, Path], options: Optional[RenderOptions] = None
) -> Path:
    """Generate a document and write it to ``path`` as UTF-8."""
    html = await generate_html(page, options)
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(html, encoding="utf-8")
    logger.info("HTML document saved", path=str(target), html_length=len(html))
    return target
