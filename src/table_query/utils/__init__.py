"""Shared utilities for table-query."""
