"""chore_tracker - recurring chore scheduling for a small office."""
