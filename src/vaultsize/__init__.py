"""Vault size history - tracks a vault's file count per day and charts it."""

__version__ = "0.1.0"
