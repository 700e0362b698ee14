"""
Core Functionality
==================

Request handling, error taxonomy and the headless-browser rendering adapter.
"""
