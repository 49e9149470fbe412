"""Utility helpers shared across the filter engine."""
