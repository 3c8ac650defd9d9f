"""Command-line interface for Decider."""
