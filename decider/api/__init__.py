"""HTTP API for Decider."""
