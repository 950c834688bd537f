"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Library settings and environment configuration
- logging: Structured logging configuration
"""
