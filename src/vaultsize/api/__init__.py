"""REST API for vault size history."""
