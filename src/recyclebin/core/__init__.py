"""
Core recycle bin logic, independent of any user interface.
"""
