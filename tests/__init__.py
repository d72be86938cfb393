"""
Test suite for goker-ledger

Contains:
- tests/unit/          : Unit tests for individual modules (pytest)
- tests/unit/test_settlement_properties.py : property-based tests (hypothesis)
"""
