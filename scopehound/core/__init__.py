"""Core types, models, configuration and errors for scopehound."""
