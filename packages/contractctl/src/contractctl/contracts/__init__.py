"""Contractctl output and config contracts."""
