"""
Core domain layer for donor-match.

This package contains pure business logic with no I/O.
All code here should be testable without network or storage access.
"""

from __future__ import annotations

__all__ = []
