"""
API module for Media Planner.

- server.py: FastAPI server exposing plan calculation and reports
"""

from .server import app

__all__ = ["app"]
