"""Restage every application in the current platform space."""
