"""Shared helpers used across envconfig modules."""
