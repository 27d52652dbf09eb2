"""Data models: column descriptors, splits, hits and row values."""
