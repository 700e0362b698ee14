"""
FastAPI REST Endpoint
=====================

Single method-multiplexed HTTP endpoint for HTML to image conversion.

Methods:
- OPTIONS: CORS preflight
- GET: Service descriptor
- POST: Render HTML to an image data URI
"""
