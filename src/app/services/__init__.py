from .unit_of_work import UnitOfWork
from .keyed_lock import KeyedLock

__all__ = [
    "UnitOfWork",
    "KeyedLock",
]
