"""Property catalog service."""
