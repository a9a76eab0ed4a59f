"""
API v1 package.

Contains versioned API routes for the registration API.
"""

from simple_auth.api.v1.routes import router

__all__ = ["router"]
