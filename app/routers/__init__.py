"""
API Routers
Separate router modules for each domain.
"""

from app.routers import coverage

__all__ = ["coverage"]
