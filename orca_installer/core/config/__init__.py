"""Installer settings loading."""
