"""Command-line interface for ideswitch."""
