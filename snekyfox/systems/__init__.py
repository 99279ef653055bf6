"""Adapters for level files and audio."""
