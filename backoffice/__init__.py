"""Supermarket back-office: product catalog and inventory management."""

__version__ = "0.1.0"
