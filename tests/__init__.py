"""Test suite for the rhino-snippets package.

This package contains unit and integration tests validating snippet
composition, catalog ingestion, cursor context resolution and the
command-line utilities.
"""
