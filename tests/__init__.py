"""
Test suite for the numerical geometry core

Contains:
- tests/unit/          : Unit tests for individual modules
"""
