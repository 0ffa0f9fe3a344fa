"""
Middleware Package

Contains application middleware components.
"""

from haste.middleware.rate_limit import RateLimitMiddleware

__all__ = ["RateLimitMiddleware"]
