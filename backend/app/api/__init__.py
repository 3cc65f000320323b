"""API routers."""

from app.api import assignments, audit, config, leaves

__all__ = [
    "assignments",
    "audit",
    "config",
    "leaves",
]
