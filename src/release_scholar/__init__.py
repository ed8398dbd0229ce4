"""
Release Scholar - release readiness checks for scholarly software

Inspects a git working tree before it is packaged and deposited with a
long-term archive: tag/version consistency, citation metadata, required
files, embedded secrets and tracked-content size.
"""

__version__ = "0.4.0"
__all__ = ["__version__"]
