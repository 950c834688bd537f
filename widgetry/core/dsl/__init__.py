"""
Declarative UI Module
=====================

YAML/JSON page definitions, validation and page construction.

Components:
- components: node types and the constructors that build them
- parser: parsing, validation and format detection
"""
