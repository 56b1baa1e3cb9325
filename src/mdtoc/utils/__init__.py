"""Shared utilities for mdtoc."""
