"""Logging and metrics for relguard."""
