"""Command line interface for authpay."""

from .app import app
from .interactive import InteractiveCli
from .render import Renderer

__all__ = [
    "InteractiveCli",
    "Renderer",
    "app",
]
