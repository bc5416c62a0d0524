"""Domain layer - ports, errors."""
