"""Bundled configuration and level data."""
