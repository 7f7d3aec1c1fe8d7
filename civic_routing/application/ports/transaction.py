"""Port interface for transaction demarcation."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager


class TransactionManager(ABC):
    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[None]:
        """Open a unit of work that commits on exit and rolls back on error.

        If the caller already opened a transaction, the unit of work joins it
        and only its own writes are rolled back on error.
        """
        ...
