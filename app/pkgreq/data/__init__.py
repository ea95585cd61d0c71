"""Bundled data files for pkgreq."""
