# app/auth/__init__.py
"""
Authentication modules for the application tracker.

This package contains:
- identity.py: Canonical authenticated identity model (provider agnostic)
"""
from app.auth.identity import Identity

__all__ = ["Identity"]
