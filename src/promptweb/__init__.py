"""Flask JSON API for the prompt search engine."""
from .web import app, main

__all__ = ["app", "main"]
