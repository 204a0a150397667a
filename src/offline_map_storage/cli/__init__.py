"""Command-line interface for offline-map-storage."""
