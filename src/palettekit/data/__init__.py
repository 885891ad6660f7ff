"""Bundled sample theme documents."""
