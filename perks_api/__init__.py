# perks_api/__init__.py
"""
Perks API: a CRUD HTTP service for merchant perks.
"""

__version__ = "1.0.0"
