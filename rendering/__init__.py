"""Pygame rendering and sound for the arcade match."""
