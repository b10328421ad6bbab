"""Statistics aggregation services."""
