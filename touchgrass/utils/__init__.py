"""Shared utilities for touchgrass."""
