"""Exercise candidate filtering, scoring and selection."""
