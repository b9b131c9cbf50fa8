"""Selector profile pipeline stages."""
