"""
widgetry
========

Input controls, output placeholders, rendering functions and page layouts
that build Bootstrap 3 markup in the Shiny class vocabulary.

This package provides:
- ``widgetry.ui``: the constructor catalogue (inputs, outputs, layouts, tags)
- ``widgetry.render``: functions producing content for output placeholders
- Declarative YAML/JSON page definitions
- Complete HTML document generation with Jinja2 templates
"""

__version__ = "1.0.0"
__author__ = "widgetry developers"

from widgetry import render, ui  # noqa: E402

__all__ = ["ui", "render", "__version__"]
