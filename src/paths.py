"""Centralised path constants for the application."""

from pathlib import Path

# Project root is 2 levels up from this file (src/paths.py -> project root)
PROJECT_ROOT = Path(__file__).resolve().parent.parent

# Optional dotenv file read by the settings and the API entry point
ENV_FILE = PROJECT_ROOT / ".env"
