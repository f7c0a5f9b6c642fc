"""
Tests for academy profiles and buyer self-service.
"""
