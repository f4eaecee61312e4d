"""Domain layer: binding model and the services working on it."""
