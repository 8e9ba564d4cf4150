"""JSON API for Questlog."""
