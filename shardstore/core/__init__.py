"""Errors, types, configuration and logging shared by every layer."""
