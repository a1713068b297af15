"""Command-line interface for Bella."""
