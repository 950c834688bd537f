"""Theme and styling support.

Provides the bootswatch theme catalogue, custom themes built with
``bs_theme`` and resolution of the ``theme=`` argument accepted by pages.
"""

from pathlib import PurePosixPath
from typing import Dict, List, Optional, Union

from pydantic import ValidationError

from widgetry.config.logging import get_logger
from widgetry.config.settings import get_settings
from widgetry.core.dependencies import bootstrap_dependency, bootswatch_url
from widgetry.core.exceptions import ThemeError
from widgetry.models.schemas import HTMLDependency, Theme

logger = get_logger(__name__)

BOOTSWATCH_THEMES = (
    "cerulean",
    "cosmo",
    "cyborg",
    "darkly",
    "flatly",
    "journal",
    "lumen",
    "paper",
    "readable",
    "sandstone",
    "simplex",
    "slate",
    "spacelab",
    "superhero",
    "united",
    "yeti",
)

ThemeLike = Union[Theme, str, None]


# Theme registry
BUILT_IN_THEMES: Dict[str, Theme] = {name: Theme(name=name, bootswatch=name) for name in BOOTSWATCH_THEMES}
BUILT_IN_THEMES["default"] = Theme(name="default")

_registry: Dict[str, Theme] = dict(BUILT_IN_THEMES)


def bs_theme(
    version: int = 3,
    bootswatch: Optional[str] = None,
    bg: Optional[str] = None,
    fg: Optional[str] = None,
    primary: Optional[str] = None,
    secondary: Optional[str] = None,
    success: Optional[str] = None,
    info: Optional[str] = None,
    warning: Optional[str] = None,
    danger: Optional[str] = None,
    base_font: Optional[str] = None,
    heading_font: Optional[str] = None,
    code_font: Optional[str] = None,
    name: Optional[str] = None,
    css: str = "",
    **variables: str,
) -> Theme:
    """Build a custom theme.

    Args:
        version: Bootstrap major version; markup is generated for Bootstrap 3
        bootswatch: Optional bootswatch theme used as the starting point
        bg, fg: Page background and foreground colours
        primary ... danger: Accent colours for buttons and links
        base_font, heading_font, code_font: Font families
        name: Theme name, defaults to the bootswatch name or "custom"
        css: Extra CSS appended after the generated rules
        **variables: Additional CSS custom properties

    Returns:
        Theme object

    Example:
        >>> theme = bs_theme(bg="#0b3d91", fg="white", base_font="Source Sans Pro")
        >>> css = theme.to_css()
    """
    if version != 3:
        raise ThemeError(f"Bootstrap {version} is not supported; pages are generated for Bootstrap 3")
    if bootswatch is not None and bootswatch.lower() not in BOOTSWATCH_THEMES:
        raise ThemeError(f"Unknown bootswatch theme '{bootswatch}'. Available: {', '.join(BOOTSWATCH_THEMES)}")

    colors = {
        key: value
        for key, value in (
            ("bg", bg),
            ("fg", fg),
            ("primary", primary),
            ("secondary", secondary),
            ("success", success),
            ("info", info),
            ("warning", warning),
            ("danger", danger),
        )
        if value is not None
    }
    fonts = {
        key: value
        for key, value in (("base", base_font), ("heading", heading_font), ("code", code_font))
        if value is not None
    }
    try:
        return Theme(
            name=name or bootswatch or "custom",
            version=version,
            bootswatch=bootswatch,
            colors=colors,
            fonts=fonts,
            variables={key: str(value) for key, value in variables.items()},
            css=css,
        )
    except ValidationError as e:
        raise ThemeError(f"Invalid theme: {e.errors()[0]['msg']}") from e


def get_theme(name: str) -> Optional[Theme]:
    """Get a registered theme by name.

    Example:
        >>> theme = get_theme('darkly')
        >>> theme.bootswatch
        'darkly'
    """
    return _registry.get(name.lower())


def register_theme(theme: Theme, replace: bool = False) -> Theme:
    """Make a theme available by name to pages and declarative definitions."""
    key = theme.name.lower()
    if key in _registry and not replace:
        raise ThemeError(f"Theme '{theme.name}' is already registered")
    _registry[key] = theme
    logger.debug("Registered theme", theme=theme.name)
    return theme


def unregister_theme(name: str) -> None:
    key = name.lower()
    if key in BUILT_IN_THEMES:
        raise ThemeError(f"Built-in theme '{name}' cannot be removed")
    _registry.pop(key, None)


def list_themes() -> List[str]:
    return sorted(_registry)


def resolve_theme(value: ThemeLike) -> Optional[Theme]:
    """
    Turn the ``theme=`` argument of a page into a Theme.

    Accepts a Theme, the name of a registered theme, or the path/URL of a
    stylesheet ending in ``.css``. ``None`` falls back to the configured
    default theme.

    Raises:
        ThemeError: If a name does not match any registered theme
    """
    if value is None:
        default = get_settings().default_theme
        return resolve_theme(default) if default else None
    if isinstance(value, Theme):
        return value
    if not isinstance(value, str):
        raise ThemeError(f"theme must be a Theme, a theme name or a .css path, got {type(value).__name__}")
    if value.lower().endswith(".css"):
        return Theme(name=PurePosixPath(value).stem or "stylesheet", stylesheet=value)
    theme = get_theme(value)
    if theme is None:
        raise ThemeError(f"Unknown theme '{value}'. Available: {', '.join(list_themes())}")
    return theme


def theme_dependencies(theme: Optional[Theme], cdn_base_url: Optional[str] = None) -> List[HTMLDependency]:
    """
    Dependencies that replace the stock Bootstrap stylesheet for a theme.

    A bootswatch theme swaps the stylesheet of the bootstrap dependency. A
    stylesheet theme keeps Bootstrap's scripts and adds its stylesheet path,
    unchanged, as a separate dependency.
    """
    if theme is None:
        return []
    if theme.stylesheet:
        scripts_only = bootstrap_dependency().model_copy(update={"stylesheet": []})
        return [
            scripts_only,
            HTMLDependency(name="bootstrap-theme", version=str(theme.version), src="", stylesheet=[theme.stylesheet]),
        ]
    if theme.bootswatch:
        return [bootstrap_dependency(stylesheet=bootswatch_url(theme.bootswatch, base=cdn_base_url))]
    return []
