"""Constrained note and chord generation."""
