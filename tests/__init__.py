"""
Test suite for matching_oracle

Contains:
- tests/unit/          : Unit tests for individual modules
"""
