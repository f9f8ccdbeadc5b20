"""Domain layer - records and handle state."""
