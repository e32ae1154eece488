"""Test suite for the pytest-specify package.

This package contains unit and integration tests validating example
tree construction, rollups, compilation, scope extension, assertion
verbs, pytest integration and the command-line interface.
"""
