"""Process table lookups and enrichment."""
