"""Utility helpers for logging and display formatting."""
