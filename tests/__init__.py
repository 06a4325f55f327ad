"""
Test suite for the lending risk kernel

Contains:
- tests/unit/          : Unit tests for individual modules
"""
