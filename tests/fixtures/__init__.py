"""Shared test constants."""
