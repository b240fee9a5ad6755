"""
FastAPI Routes.

API 라우트 (REST)
"""

from . import merge

__all__ = ["merge"]
