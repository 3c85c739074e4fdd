"""
Output modules for resolve-hostname
"""

from .json_export import JsonExporter

__all__ = ['JsonExporter']
