"""Place API routes."""
