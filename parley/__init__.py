"""Parley: an interactive terminal prompt engine."""
