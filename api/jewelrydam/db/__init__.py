"""Database bootstrap helpers."""
