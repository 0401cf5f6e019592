"""Session time budgeting and exercise counting."""
