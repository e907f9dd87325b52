"""Command line interface for release-bump."""
