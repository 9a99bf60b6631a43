"""Test suite for the rfml-exporter package.

This package contains unit and integration tests validating record
validation, RFML rendering, API access, file management, and the
export command.
"""
