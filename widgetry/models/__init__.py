"""
Data Models
===========

Pydantic data models for internal data structures.

Models:
- schemas: dependencies, themes, bindings, rendered outputs and parse results
"""
