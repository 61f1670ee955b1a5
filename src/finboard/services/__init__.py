"""Domain services for FinBoard."""
