"""
health_export

Streaming conversion of a health records ``export.xml`` into per-type
JSON + CSV tables.
"""

__version__ = "0.1.0"
