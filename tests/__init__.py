"""
Test Suite
==========

Test suite matching the widgetry/ package structure.

Test Categories:
- unit: Unit tests for individual modules
- integration: Tests running the definition to document pipeline
"""
