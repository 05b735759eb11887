"""Data collection for sortud."""
