"""
API router package for callrelay.

Contains the FastAPI routers for call lifecycle, realtime transcript and
status relays, FAQ, email confirmation, signed URL, viewer WebSocket,
static pages, and health.
"""
