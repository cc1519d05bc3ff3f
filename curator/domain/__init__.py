"""Domain layer: catalog wrappers, seed collection, curation actions."""
