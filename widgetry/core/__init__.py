"""
Core Library
============

Modules:
- tags: HTML tag tree and markup rendering
- ids: input/output identifier validation
- inputs, outputs, layouts: the constructor catalogue
- render: values for output placeholders and static filling of pages
- themes: bootswatch catalogue and custom themes
- dsl: declarative UI definitions
- rendering: complete HTML document generation
"""
