"""Shared helpers for the metrictree test-suite."""
