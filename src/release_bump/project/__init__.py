"""Manifest file reading and version rewriting."""
