"""Persistence and profile services."""
