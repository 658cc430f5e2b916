"""Core utilities shared across the syntax layer.

This package provides foundational utilities that the parser and the AST
visitors both depend on:

    core <- syntax

Exports:
    DepthGuard: Context manager for recursion depth limiting
    DepthLimitExceededError: Exception raised when depth limit exceeded

Python 3.13+.
"""

from .depth_guard import DepthGuard, DepthLimitExceededError

__all__ = ["DepthGuard", "DepthLimitExceededError"]
