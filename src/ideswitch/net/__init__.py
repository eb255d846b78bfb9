"""Network helpers for optional online lookups."""
