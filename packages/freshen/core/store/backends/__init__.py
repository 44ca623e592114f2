"""Fingerprint store backend implementations."""
