"""Utility helpers (config loading, constants)."""
