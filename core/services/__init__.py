# Services Module
from .database import Database
from .result import Result

__all__ = ["Database", "Result"]
