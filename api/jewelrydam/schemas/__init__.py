"""Schemas for API requests and responses."""
