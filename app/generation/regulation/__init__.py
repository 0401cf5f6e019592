"""Recovery- and feedback-driven auto-regulation."""
