"""Command implementations for the tether CLI."""
