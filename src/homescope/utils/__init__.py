"""Helpers for sandboxed paths and text handling."""
