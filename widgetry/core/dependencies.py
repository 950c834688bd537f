"""
HTML Dependencies
=================

CSS/JS assets pulled in by pages and by the richer input controls. URLs are
built from the configured CDN base and asset versions.
"""

from typing import List, Optional

from widgetry.config.settings import get_settings
from widgetry.models.schemas import HTMLDependency


def _cdn(package: str, version: str, path: str = "", base: Optional[str] = None) -> str:
    root = base or get_settings().cdn_base_url
    url = f"{root.rstrip('/')}/{package}@{version}"
    return f"{url}/{path}" if path else url


def jquery_dependency() -> HTMLDependency:
    version = get_settings().jquery_version
    return HTMLDependency(
        name="jquery",
        version=version,
        src=_cdn("jquery", version, "dist"),
        script=["jquery.min.js"],
    )


def bootstrap_dependency(stylesheet: Optional[str] = None) -> HTMLDependency:
    """Bootstrap CSS and JS; ``stylesheet`` replaces the stock CSS (themes)."""
    version = get_settings().bootstrap_version
    return HTMLDependency(
        name="bootstrap",
        version=version,
        src=_cdn("bootstrap", version, "dist"),
        script=["js/bootstrap.min.js"],
        stylesheet=[stylesheet or "css/bootstrap.min.css"],
        head='<meta name="viewport" content="width=device-width, initial-scale=1" />',
    )


def page_dependencies() -> List[HTMLDependency]:
    return [jquery_dependency(), bootstrap_dependency()]


def ion_rangeslider_dependency() -> HTMLDependency:
    version = get_settings().ion_rangeslider_version
    return HTMLDependency(
        name="ionrangeslider",
        version=version,
        src=_cdn("ion-rangeslider", version),
        script=["js/ion.rangeSlider.min.js"],
        stylesheet=["css/ion.rangeSlider.min.css"],
    )


def datepicker_dependency() -> HTMLDependency:
    version = get_settings().datepicker_version
    return HTMLDependency(
        name="bootstrap-datepicker",
        version=version,
        src=_cdn("bootstrap-datepicker", version, "dist"),
        script=["js/bootstrap-datepicker.min.js"],
        stylesheet=["css/bootstrap-datepicker3.min.css"],
    )


def selectize_dependency() -> HTMLDependency:
    version = get_settings().selectize_version
    return HTMLDependency(
        name="selectize",
        version=version,
        src=_cdn("selectize", version, "dist"),
        script=["js/standalone/selectize.min.js"],
        stylesheet=["css/selectize.bootstrap3.css"],
    )


def font_awesome_dependency() -> HTMLDependency:
    version = get_settings().font_awesome_version
    return HTMLDependency(
        name="font-awesome",
        version=version,
        src=_cdn("font-awesome", version),
        stylesheet=["css/font-awesome.min.css"],
    )


def bootswatch_url(name: str, base: Optional[str] = None) -> str:
    """Stylesheet URL of a bootswatch theme matching the Bootstrap version."""
    version = get_settings().bootstrap_version
    return _cdn("bootswatch", version, f"{name}/bootstrap.min.css", base=base)


def rebase_dependency(dep: HTMLDependency, cdn_base_url: str) -> HTMLDependency:
    """Point a dependency served from the configured CDN at another base URL."""
    current = get_settings().cdn_base_url
    if not dep.src.startswith(current):
        return dep
    return dep.model_copy(update={"src": cdn_base_url.rstrip("/") + dep.src[len(current):]})
