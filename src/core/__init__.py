"""
Core numerical primitives and domain values.

This module contains the foundational building blocks that are independent
of rendering, UI state, and expression evaluation.
"""
