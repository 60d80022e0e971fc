"""Filesystem and subprocess adapters."""
