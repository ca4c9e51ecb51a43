"""Breakdown document readers."""
