"""Trash gateway (reversible removal of superseded directories)."""
