"""Logging, diagnostics and settings for the command line tools."""
