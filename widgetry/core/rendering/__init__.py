"""
Rendering Module
================

Complete HTML document generation.

Components:
- html_generator: page to HTML5 document conversion
- templates: Jinja2 document templates
"""
