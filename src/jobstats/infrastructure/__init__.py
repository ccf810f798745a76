"""Persistence adapters for job statistics."""
