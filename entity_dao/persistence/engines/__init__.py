"""
DbEngine implementations.

Implementation modules:
- memory: In-memory engine for testing and local runs
- mongodb: motor based engine for MongoDB
"""

from .memory import MemoryDbEngine
from .mongodb import MongoDbEngine, MotorCollection

__all__ = [
    "MemoryDbEngine",
    "MongoDbEngine",
    "MotorCollection",
]
