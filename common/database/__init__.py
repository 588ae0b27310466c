"""
Database module - Async MongoDB connection via Motor.
"""

from common.database.mongodb import MongoDB

__all__ = ["MongoDB"]
