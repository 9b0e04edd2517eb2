"""Core page cache and rendering."""
