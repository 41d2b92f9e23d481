"""
Test suite for calcengine

Contains:
- tests/unit/          : Unit tests for individual modules and the engine facade
"""
