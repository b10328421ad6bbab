"""Date range and filter helpers."""
