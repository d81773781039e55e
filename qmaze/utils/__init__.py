"""Maze construction, serialization and random number utilities."""
