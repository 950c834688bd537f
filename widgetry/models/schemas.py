"""
Pydantic Models and Schemas
===========================

Core data models for HTML dependencies, themes, rendered outputs, document
rendering options and declarative parsing results.
"""

import re
from typing import Optional, List, Dict, Any, Tuple
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

CSS_NAME_PATTERN = re.compile(r"[A-Za-z0-9_-]+")
UNSAFE_CSS_CHARS = "<>{};"


# Enums
class BindingKind(str, Enum):
    """Role a tag plays towards application logic."""
    INPUT = "input"
    OUTPUT = "output"


class OutputKind(str, Enum):
    """Kinds of output placeholders."""
    TEXT = "text"
    VERBATIM = "verbatim"
    TABLE = "table"
    DATA_TABLE = "data_table"
    PLOT = "plot"
    IMAGE = "image"
    UI = "ui"
    DOWNLOAD = "download"


class RenderKind(str, Enum):
    """Kinds of values produced by the render functions."""
    TEXT = "text"
    PRINT = "print"
    TABLE = "table"
    DATA_TABLE = "data_table"
    PLOT = "plot"
    IMAGE = "image"
    UI = "ui"
    DOWNLOAD = "download"


# Placeholder kind -> render kinds it accepts
OUTPUT_COMPATIBILITY: Dict[OutputKind, Tuple[RenderKind, ...]] = {
    OutputKind.TEXT: (RenderKind.TEXT,),
    OutputKind.VERBATIM: (RenderKind.TEXT, RenderKind.PRINT),
    OutputKind.TABLE: (RenderKind.TABLE,),
    OutputKind.DATA_TABLE: (RenderKind.DATA_TABLE,),
    OutputKind.PLOT: (RenderKind.PLOT,),
    OutputKind.IMAGE: (RenderKind.IMAGE, RenderKind.PLOT),
    OutputKind.UI: (RenderKind.UI, RenderKind.TABLE),
    OutputKind.DOWNLOAD: (RenderKind.DOWNLOAD,),
}


class Binding(BaseModel):
    """Ties a tag to an input or output id."""
    kind: BindingKind = Field(..., description="Input or output")
    id: str = Field(..., min_length=1, description="Input or output identifier")
    output_kind: Optional[OutputKind] = Field(None, description="Placeholder kind for outputs")

    @model_validator(mode="after")
    def check_output_kind(self) -> "Binding":
        """Outputs must declare which kind of content they accept."""
        if self.kind == BindingKind.OUTPUT and self.output_kind is None:
            raise ValueError("Output bindings require an output_kind")
        return self


class HTMLDependency(BaseModel):
    """CSS/JS assets a tag needs in the document head."""
    name: str = Field(..., min_length=1, description="Dependency name")
    version: str = Field(..., min_length=1, description="Dependency version")
    src: str = Field(..., description="Base URL the files are served from")
    script: List[str] = Field(default_factory=list, description="Script files")
    stylesheet: List[str] = Field(default_factory=list, description="Stylesheet files")
    head: Optional[str] = Field(None, description="Extra markup for the document head")

    model_config = ConfigDict(frozen=True)

    @property
    def version_info(self) -> Tuple[int, ...]:
        """Numeric version components, non numeric parts count as zero."""
        parts: List[int] = []
        for piece in self.version.split("."):
            digits = "".join(ch for ch in piece if ch.isdigit())
            parts.append(int(digits) if digits else 0)
        return tuple(parts)

    def script_urls(self) -> List[str]:
        return [self._url(name) for name in self.script]

    def stylesheet_urls(self) -> List[str]:
        return [self._url(name) for name in self.stylesheet]

    def _url(self, name: str) -> str:
        if name.startswith(("http://", "https://", "/")) or not self.src:
            return name
        return f"{self.src.rstrip('/')}/{name}"


class Theme(BaseModel):
    """Visual styling rules applied to a page's generated markup.

    Attributes:
        name: Theme name
        version: Bootstrap major version the theme targets
        bootswatch: Optional bootswatch theme replacing the Bootstrap stylesheet
        colors: Colour overrides (bg, fg, primary, ...)
        fonts: Font overrides (base, heading, code)
        variables: Additional CSS custom properties
        css: Additional custom CSS
        stylesheet: URL or path of a complete replacement stylesheet
    """
    name: str = Field(..., min_length=1, description="Theme name")
    version: int = Field(3, ge=3, le=5, description="Bootstrap major version")
    bootswatch: Optional[str] = Field(None, description="Bootswatch theme name")
    colors: Dict[str, str] = Field(default_factory=dict, description="Colour palette")
    fonts: Dict[str, str] = Field(default_factory=dict, description="Font configuration")
    variables: Dict[str, str] = Field(default_factory=dict, description="Extra CSS variables")
    css: str = Field("", description="Additional custom CSS")
    stylesheet: Optional[str] = Field(None, description="Replacement stylesheet URL")

    @field_validator("bootswatch")
    @classmethod
    def normalise_bootswatch(cls, v: Optional[str]) -> Optional[str]:
        return v.lower() if v else v

    @field_validator("colors", "fonts", "variables")
    @classmethod
    def check_css_values(cls, v: Dict[str, str]) -> Dict[str, str]:
        for key, value in v.items():
            if not CSS_NAME_PATTERN.fullmatch(key):
                raise ValueError(f"invalid CSS property name '{key}'")
            if any(ch in value for ch in UNSAFE_CSS_CHARS):
                raise ValueError(
                    f"invalid value for '{key}': {UNSAFE_CSS_CHARS!r} are not allowed in theme values"
                )
        return v

    def to_css(self) -> str:
        """Convert theme to CSS.

        Returns:
            CSS string
        """
        css_vars: List[str] = []

        for key, value in self.colors.items():
            css_vars.append(f"  --color-{key}: {value};")

        for key, value in self.fonts.items():
            css_vars.append(f"  --font-{key}: {value};")

        for key, value in self.variables.items():
            css_vars.append(f"  --{key.replace('_', '-')}: {value};")

        rules: List[str] = []
        if css_vars:
            rules.append(":root {\n" + "\n".join(css_vars) + "\n}")

        if "bg" in self.colors or "fg" in self.colors or "base" in self.fonts:
            body: List[str] = []
            if "bg" in self.colors:
                body.append("  background-color: var(--color-bg);")
            if "fg" in self.colors:
                body.append("  color: var(--color-fg);")
            if "base" in self.fonts:
                body.append("  font-family: var(--font-base);")
            rules.append("body {\n" + "\n".join(body) + "\n}")

        if "heading" in self.fonts:
            rules.append("h1, h2, h3, h4, h5, h6 {\n  font-family: var(--font-heading);\n}")

        if "code" in self.fonts:
            rules.append("code, pre, kbd, samp {\n  font-family: var(--font-code);\n}")

        if "bg" in self.colors and "fg" in self.colors:
            rules.append(
                ".well, .form-control, .navbar-default {\n"
                "  background-color: var(--color-bg);\n"
                "  color: var(--color-fg);\n"
                "}"
            )

        for name in ("primary", "success", "info", "warning", "danger"):
            if name in self.colors:
                rules.append(
                    f".btn-{name} {{\n"
                    f"  background-color: var(--color-{name});\n"
                    f"  border-color: var(--color-{name});\n"
                    "}"
                )

        if "primary" in self.colors:
            rules.append("a {\n  color: var(--color-primary);\n}")

        if self.css:
            rules.append(self.css.strip())

        # Keep the stylesheet from closing the surrounding <style> element
        css = "\n\n".join(rules).replace("</", "<\\/")
        return css + ("\n" if rules else "")


class RenderedOutput(BaseModel):
    """Value produced by a render function, ready to fill a placeholder."""
    kind: RenderKind = Field(..., description="What produced this value")
    html: Optional[str] = Field(None, description="Markup placed inside the placeholder")
    payload: Optional[Dict[str, Any]] = Field(None, description="JSON payload for client widgets")
    attributes: Dict[str, str] = Field(
        default_factory=dict, description="Attributes set on the placeholder itself"
    )
    dependencies: List[HTMLDependency] = Field(
        default_factory=list, description="Assets the rendered content needs"
    )

    @model_validator(mode="after")
    def check_content(self) -> "RenderedOutput":
        """A rendered value must carry something to place."""
        if self.html is None and self.payload is None and not self.attributes:
            raise ValueError("Rendered output needs html, payload or attributes")
        return self


class RenderOptions(BaseModel):
    """Options for rendering a page to a complete HTML document."""
    title: Optional[str] = Field(None, description="Document title override")
    lang: Optional[str] = Field(None, description="Document language override")
    include_dependencies: bool = Field(True, description="Emit <link>/<script> tags")
    cdn_base_url: Optional[str] = Field(None, description="CDN base URL override")
    pretty: Optional[bool] = Field(None, description="Indent markup; defaults to settings")
    check_ids: bool = Field(True, description="Reject pages with duplicate ids")
    extra_head: List[str] = Field(default_factory=list, description="Raw markup added to <head>")


# Parsing Results
class ParseResult(BaseModel):
    """Result of declarative UI parsing."""
    success: bool = Field(..., description="Whether parsing succeeded")
    page: Optional[Any] = Field(None, description="Constructed page tag")
    errors: List[str] = Field(default_factory=list, description="Parsing errors")
    warnings: List[str] = Field(default_factory=list, description="Parsing warnings")
    processing_time: Optional[float] = Field(None, description="Parsing time in seconds")

    model_config = ConfigDict(arbitrary_types_allowed=True)
