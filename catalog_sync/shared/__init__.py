"""
Shared utilities for the catalog sync pipeline
"""
