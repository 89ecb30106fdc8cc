"""REST API for Sunboard."""
