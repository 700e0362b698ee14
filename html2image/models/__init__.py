"""
Data Models
===========

Pydantic models for render requests, render results and API responses.
"""
