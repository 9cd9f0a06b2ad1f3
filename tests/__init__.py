"""
Test suite for the Environmental Quality API.

Run with:
    pytest -v
"""
