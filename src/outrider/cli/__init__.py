"""Command-line interface for Outrider."""
