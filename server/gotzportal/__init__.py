"""Gotz Portal safari tour operator API."""
