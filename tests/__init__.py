"""
Test suite for autotrade

Contains:
- tests/unit/   : Unit tests for individual modules
- tests/fakes.py: In-memory collaborators (offers, inventories, prices, checks)
"""
