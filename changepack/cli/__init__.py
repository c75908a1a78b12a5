"""Command line interface for ChangeKit."""
