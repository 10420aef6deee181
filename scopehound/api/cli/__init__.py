"""Command-line interface for scopehound."""
