"""
recyclebin - Linux Recycle Bin

A CLI tool that moves files into a recoverable bin instead of deleting them.
"""

__version__ = "2.1.0"

# Re-export core models for convenience
from recyclebin.core.config.models import BinConfig
from recyclebin.core.records.models import ItemKind, Record
from recyclebin.core.recycle_bin import RecycleBin

__all__ = ["BinConfig", "ItemKind", "Record", "RecycleBin", "__version__"]
