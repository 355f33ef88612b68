"""API route modules."""

from vaultsize.api.routes import health, history

__all__ = ["health", "history"]
