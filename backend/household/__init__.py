"""Household management API."""
