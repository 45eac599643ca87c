"""
Test suite for numutil

Contains:
- tests/unit/          : Unit tests for individual modules
"""
