"""Core domain entities."""
