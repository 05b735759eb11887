"""Core functionality: configuration, tree building and rendering."""
