"""Workout prescription and assembly."""
