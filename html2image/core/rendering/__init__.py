"""
Rendering
=========

Playwright-based screenshot rendering of HTML documents.
"""
