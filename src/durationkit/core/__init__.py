"""
Core domain models, numerical primitives, and contracts.

This module contains the foundational building blocks of durationkit.
"""
