"""
Payload area for relocated item bytes.
"""

from recyclebin.core.payload.area import PayloadArea

__all__ = ["PayloadArea"]
