"""Shared constants and error types for Sharing Hub."""
