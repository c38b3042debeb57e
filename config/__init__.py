"""Application configuration modules."""
