"""Core validation and audit engine for Release Scholar."""
