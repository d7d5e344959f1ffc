"""Randomized test data used to populate a fresh schema."""
