"""
API Routers package.
"""

from . import jobs, projects, snapshots

__all__ = ["jobs", "projects", "snapshots"]
