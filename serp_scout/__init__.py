# serp_scout/__init__.py
"""
SerpScout package initializer.
Defines package version; the CLI lives in :mod:`serp_scout.cli`.
"""
__version__ = "0.1.0"
