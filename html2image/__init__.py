"""
HTML to Image API
=================

HTTP service that renders an HTML document to a PNG or JPEG image with a
headless Chromium browser and returns it as a base64 data URI.
"""

__version__ = "1.0.0"
