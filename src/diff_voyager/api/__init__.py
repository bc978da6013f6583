"""
HTTP API for Diff Voyager.
"""

from .main import create_app

__all__ = ["create_app"]
