"""Structural changeset engine for keyed collections."""

__version__ = "0.1.0"
