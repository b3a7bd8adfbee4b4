"""Command-line interface for AudioShelf."""
