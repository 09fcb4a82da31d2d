"""Command line interface for deity."""
