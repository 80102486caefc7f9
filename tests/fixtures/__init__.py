"""Modules scanned by the discovery and registration tests."""
