"""
Database models for TinyLink.

Click accounting lives on the link row itself (a counter and the last
access time); there is no separate hit table.
"""

from .link import Link

__all__ = ["Link"]
