"""Presentation-layer payload schemas."""
