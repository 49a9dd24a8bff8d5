"""HTTP API of the markup service."""
