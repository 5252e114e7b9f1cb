"""
ID generation for recycle bin records and payloads.
"""

from recyclebin.core.ids.generator import IdGenerator

__all__ = ["IdGenerator"]
