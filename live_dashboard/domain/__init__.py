"""Domain layer: dashboard models, wire constants and gateway contracts."""
