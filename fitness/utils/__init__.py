"""Shared helpers: terminal colors and application-wide constants."""
