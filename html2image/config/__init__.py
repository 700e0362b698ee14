"""
Configuration Management
=======================

Environment-based configuration using Pydantic Settings.

Components:
- settings: Application, rendering and browser settings
- logging: Structured logging configuration
"""
