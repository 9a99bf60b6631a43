"""Export Rainforest test cases into local RFML files.

The `rfml_exporter` package fetches test definitions from the Rainforest
web service and serializes each of them into the line-oriented RFML
markup format.

Key features:
- validated, immutable models of remote test records;
- deterministic RFML rendering with optional embedded test references;
- one file per exported test, stable file names across re-exports;
- a small command-line interface configurable via environment variables.
"""
