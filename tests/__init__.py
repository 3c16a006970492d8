"""
Test suite for dense_matrix

Contains:
- tests/unit/          : Unit tests for individual modules
"""
