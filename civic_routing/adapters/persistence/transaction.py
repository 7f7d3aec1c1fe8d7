"""SQL transaction manager — implements TransactionManager on an AsyncSession."""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession

from civic_routing.application.ports.transaction import TransactionManager


class SqlTransactionManager(TransactionManager):
    def __init__(self, session: AsyncSession):
        self._s = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[None]:
        if self._s.in_transaction():
            # Caller owns the outer transaction (e.g. report intake); a
            # SAVEPOINT keeps our writes all-or-nothing and leaves the commit
            # to the caller.
            async with self._s.begin_nested():
                yield
        else:
            async with self._s.begin():
                yield
