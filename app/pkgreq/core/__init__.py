"""Core requirement resolution and installation logic."""
