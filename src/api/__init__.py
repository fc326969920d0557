"""API module for Notion lead tracking."""

from src.api.app import app

__all__ = ["app"]
