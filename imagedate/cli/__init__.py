"""Command line interface for imagedate."""
