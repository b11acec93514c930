"""
Test suite for durationkit

Contains:
- tests/unit/          : Unit tests for individual modules
"""
