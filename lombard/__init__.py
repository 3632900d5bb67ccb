"""Lombard client registry: validated client records over interchangeable storage backends."""

__version__ = "0.1.0"
