"""Questlog - game backlog tracker with XP, achievements and daily rewards."""

__version__ = "0.1.0"
