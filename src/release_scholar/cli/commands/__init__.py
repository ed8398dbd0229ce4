"""Top-level release-scholar commands (auto-discovered by the dispatcher)."""
