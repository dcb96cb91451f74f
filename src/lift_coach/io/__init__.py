"""Storage adapters and serialization."""
