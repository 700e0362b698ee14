"""
Test Suite
==========

Test suite matching the html2image/ package structure.

Test Categories:
- unit: Unit tests for individual components
- integration: HTTP contract tests against the FastAPI application
"""
