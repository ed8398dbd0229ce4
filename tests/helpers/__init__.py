"""Test helper modules for the release-scholar test suite.

- env: TestGitRepo for hermetic git repositories
"""
from __future__ import annotations
