"""Gateway backends: embedded SQLModel store and remote REST service."""
