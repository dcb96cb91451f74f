"""Command-line interface for lift-coach."""
