"""Adapters for discovery backends and report rendering."""
