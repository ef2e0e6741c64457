"""Bench Map API."""
