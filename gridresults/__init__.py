"""Merge sharded test grid results into a single report."""

__version__ = '0.3'
