from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from .cards import CardSource
from .exceptions import InvalidActionError, RoundStateError
from .game import GameEngine
from .models import TableConfig

LOGGER = logging.getLogger(__name__)

# A GameEngine serves one caller at a time. TableManager gives every table its
# own lock so independent tables never wait on each other.

OPERATIONS = frozenset({"start_round", "raise_bet", "call", "fold", "end_street", "settle"})


@dataclass
class TableSlot:
    engine: GameEngine
    lock: asyncio.Lock = field(default_factory=asyncio.Lock)


class TableManager:
    def __init__(self) -> None:
        self.tables: Dict[str, TableSlot] = {}

    def open_table(
        self,
        table_id: str,
        balances: Sequence[int],
        config: Optional[TableConfig] = None,
        deck: Optional[CardSource] = None,
    ) -> GameEngine:
        if table_id in self.tables:
            raise RoundStateError(f"Table {table_id} already open")
        engine = GameEngine(balances, config, deck)
        self.tables[table_id] = TableSlot(engine=engine)
        LOGGER.info("Opened table %s with %d players", table_id, len(balances))
        return engine

    def close_table(self, table_id: str) -> None:
        self._slot(table_id)
        del self.tables[table_id]
        LOGGER.info("Closed table %s", table_id)

    def engine(self, table_id: str) -> GameEngine:
        return self._slot(table_id).engine

    def _slot(self, table_id: str) -> TableSlot:
        slot = self.tables.get(table_id)
        if slot is None:
            raise RoundStateError(f"Unknown table {table_id}")
        return slot

    async def perform(self, table_id: str, operation: str, *args: Any) -> Any:
        """Run one state-machine operation while holding that table's lock."""
        if operation not in OPERATIONS:
            raise InvalidActionError(f"Unsupported operation {operation}")
        slot = self._slot(table_id)
        async with slot.lock:
            return getattr(slot.engine, operation)(*args)
