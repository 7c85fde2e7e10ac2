"""
Test suite for the DentalCare API.

Lifecycle managers are exercised directly against an in-memory database;
test_api.py drives the HTTP layer.
"""
