"""Error reporting integrations."""
