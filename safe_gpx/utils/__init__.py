"""Helpers for the command line: region strings and output paths."""
