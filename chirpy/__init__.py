"""Chirpy: a small message-board API backed by a single JSON file."""

__version__ = "0.1.0"
