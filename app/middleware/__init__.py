"""
Middleware package for the Property Marketplace API.
"""

from .request_context import RequestContextMiddleware

__all__ = ["RequestContextMiddleware"]
