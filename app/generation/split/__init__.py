"""Muscle split rotation and session phase cycling."""
