"""Balanced squad generation for amateur football matches."""
