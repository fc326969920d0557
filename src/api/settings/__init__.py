"""Settings API endpoints."""
