"""Flask blueprints for the FinBoard screens."""
