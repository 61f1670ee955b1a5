"""Domain layer: gateway contracts shared by every backend."""
