"""HTTP server for plant identification."""

from .app import create_app
from .main import main

__all__ = ["create_app", "main"]
