"""HTTP interface: blueprints and per-request session helpers."""
