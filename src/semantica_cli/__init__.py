"""Semantica command-line interface."""
