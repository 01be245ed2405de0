"""Minimal HTTP file exchange server."""
