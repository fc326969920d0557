"""Lead API endpoints."""
