"""
Test suite for exact-root-two

Contains:
- tests/unit/          : Unit tests for fixed_width, Dyadic, RootTwo, logging
"""
