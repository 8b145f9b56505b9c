"""Domain layer: list status variants, commands and the pure reducer."""
