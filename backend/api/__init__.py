"""
API module - routes and schemas.
Routes are split by domain: org, settings.
"""

from .routes import register_routes

__all__ = ["register_routes"]
