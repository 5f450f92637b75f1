"""Bundled level files."""
