"""Report shapes and their assembly."""
