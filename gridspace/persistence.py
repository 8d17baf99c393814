"""
GridPersistence interface for pluggable grid storage backends.

Grids are stored cell by cell: each record holds the cell's coordinate
(``u`` = i, ``v`` = j) and its data. Saving upserts by coordinate, so saving
part of a grid later only replaces the selected cells. Loading takes an
optional inclusive coordinate window and rebuilds a ``GridStore`` from the
records inside it.

Three included implementations:
1. InMemoryGridPersistence - Dict-based storage, data lost on exit (testing, prototyping)
2. JsonGridPersistence - One human-readable JSON file per collection
3. PostgresGridPersistence - JSONB rows in PostgreSQL (asyncpg)

All methods are async so storage I/O can run alongside other work; the grid
algorithms themselves stay synchronous.

Usage pattern:
    persistence = JsonGridPersistence("grid_store", collection="level_1")
    await persistence.initialize()
    saved = await persistence.save(grid)
    restored = await persistence.load(GridBounds(i0=0, j0=0, iN=15, jN=15))
    await persistence.close()

Stored data goes through JSON for the file and database backends: tuples come
back as lists and dict keys as strings.
"""

import asyncio
import copy
import json
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional

from .config import Config
from .environment.grid import CellPredicate, Coord, GridStore
from .environment.schemas import CellRecord, GridBounds
from .logging_utils import TAG_INFO, TAG_SUCCESS, log_info, log_success

try:  # Optional dependency (only needed for PostgresGridPersistence)
    import asyncpg
except ImportError:  # pragma: no cover - asyncpg may not be installed for json/memory usage
    asyncpg = None


def _select(grid: GridStore, criteria: Optional[CellPredicate]) -> List[CellRecord]:
    """Records for every cell matching ``criteria`` (all cells when omitted)."""
    return [
        CellRecord(u=coord.i, v=coord.j, data=copy.deepcopy(cell))
        for cell, coord in grid.each(criteria)
    ]


def _assemble(records: List[CellRecord], bounds: Optional[GridBounds]) -> GridStore:
    window = bounds or GridBounds()
    grid = GridStore()
    for record in records:
        if window.contains(record.coord):
            grid.set(record.coord, record.data)
    return grid


class GridPersistence(ABC):
    """Abstract base class for grid storage.

    Method categories:
    1. Lifecycle: initialize(), close()
    2. Cells: save(), load(), delete_all()
    3. Discovery: list_collections()

    Each instance works on one named collection (``Config.GRID_COLLECTION`` by
    default) so several grids can share a backend.
    """

    def __init__(self, collection: Optional[str] = None):
        self.collection = collection or Config.GRID_COLLECTION

    @abstractmethod
    async def initialize(self) -> None:
        """Prepare the backend (create directories, pools, tables)."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Release backend resources."""
        pass

    @abstractmethod
    async def save(self, grid: GridStore, criteria: Optional[CellPredicate] = None) -> int:
        """
        Save the cells of ``grid`` selected by ``criteria``.

        Args:
            grid: Grid to store
            criteria: ``(cell, coord) -> bool``; every cell is saved when omitted

        Returns:
            Number of records written
        """
        pass

    @abstractmethod
    async def load(self, bounds: Optional[GridBounds] = None) -> GridStore:
        """
        Load stored cells inside ``bounds`` (inclusive) into a new grid.

        Args:
            bounds: Coordinate window; defaults to 0..65535 on both axes

        Returns:
            GridStore holding the stored cells (empty when nothing matched)
        """
        pass

    @abstractmethod
    async def delete_all(self) -> None:
        """Remove every record of this collection."""
        pass

    @abstractmethod
    async def list_collections(self) -> List[str]:
        """Names of the collections present in the backend."""
        pass


class InMemoryGridPersistence(GridPersistence):
    """Dict-backed storage; records are deep-copied in and out.

    Storage structure:
    - collections: Dict[collection, Dict[Coord, cell data]]
    """

    def __init__(self, collection: Optional[str] = None):
        super().__init__(collection)
        self.collections: Dict[str, Dict[Coord, object]] = {}

    async def initialize(self) -> None:
        self.collections.setdefault(self.collection, {})

    async def close(self) -> None:
        # Data is kept so callers can inspect it after use
        pass

    async def save(self, grid: GridStore, criteria: Optional[CellPredicate] = None) -> int:
        records = _select(grid, criteria)
        store = self.collections.setdefault(self.collection, {})
        for record in records:
            store[record.coord] = record.data
        return len(records)

    async def load(self, bounds: Optional[GridBounds] = None) -> GridStore:
        store = self.collections.get(self.collection, {})
        records = [
            CellRecord(u=coord.i, v=coord.j, data=copy.deepcopy(data))
            for coord, data in store.items()
        ]
        return _assemble(records, bounds)

    async def delete_all(self) -> None:
        self.collections.pop(self.collection, None)

    async def list_collections(self) -> List[str]:
        return sorted(self.collections)


class JsonGridPersistence(GridPersistence):
    """File-based storage: ``{base_path}/{collection}.json`` holds a record list.

    File I/O runs in a worker thread (asyncio.to_thread). Records are sorted
    by coordinate so files diff cleanly.
    """

    def __init__(self, base_path: Path | str | None = None, collection: Optional[str] = None):
        super().__init__(collection)
        self.base_path = Path(base_path or Config.JSON_STORE_DIR)

    @property
    def path(self) -> Path:
        return self.base_path / f"{self.collection}.json"

    async def initialize(self) -> None:
        await asyncio.to_thread(self.base_path.mkdir, parents=True, exist_ok=True)

    async def close(self) -> None:
        return None

    def _read(self) -> Dict[Coord, CellRecord]:
        if not self.path.exists():
            return {}
        payload = json.loads(self.path.read_text("utf-8"))
        records = [CellRecord.model_validate(item) for item in payload]
        return {record.coord: record for record in records}

    def _write(self, records: Dict[Coord, CellRecord]) -> None:
        payload = [records[coord].model_dump(mode="json") for coord in sorted(records)]
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(payload, indent=2), "utf-8")

    async def save(self, grid: GridStore, criteria: Optional[CellPredicate] = None) -> int:
        selected = _select(grid, criteria)
        log_info(f"  {TAG_INFO} [JSON] {len(selected)} records queued for {self.path}")

        def _upsert() -> None:
            records = self._read()
            for record in selected:
                records[record.coord] = record
            self._write(records)

        await asyncio.to_thread(_upsert)
        return len(selected)

    async def load(self, bounds: Optional[GridBounds] = None) -> GridStore:
        records = await asyncio.to_thread(self._read)
        grid = _assemble(list(records.values()), bounds)
        log_success(f"  {TAG_SUCCESS} [JSON] {len(grid)} grid cells loaded")
        return grid

    async def delete_all(self) -> None:
        await asyncio.to_thread(self.path.unlink, missing_ok=True)

    async def list_collections(self) -> List[str]:
        if not self.base_path.exists():
            return []
        return sorted(path.stem for path in self.base_path.glob("*.json"))


class PostgresGridPersistence(GridPersistence):
    """PostgreSQL-backed storage using an asyncpg connection pool.

    Database schema (created by initialize()):
    - grid_cells(collection TEXT, u INTEGER, v INTEGER, data JSONB,
      PRIMARY KEY (collection, u, v))
    """

    CREATE_TABLE = """
        CREATE TABLE IF NOT EXISTS grid_cells (
            collection TEXT NOT NULL,
            u INTEGER NOT NULL,
            v INTEGER NOT NULL,
            data JSONB,
            PRIMARY KEY (collection, u, v)
        )
    """

    def __init__(self, database_url: Optional[str] = None, collection: Optional[str] = None):
        if asyncpg is None:  # pragma: no cover - handled during runtime when dependency missing
            raise ImportError(
                "asyncpg is required for PostgresGridPersistence. Install with `pip install asyncpg`."
            )

        super().__init__(collection)
        self.database_url = database_url or Config.DATABASE_URL
        self.pool: Optional[asyncpg.Pool] = None

    async def initialize(self) -> None:
        if self.pool is None:
            self.pool = await asyncpg.create_pool(self.database_url)
        async with self.pool.acquire() as conn:
            await conn.execute(self.CREATE_TABLE)

    async def close(self) -> None:
        if self.pool is not None:
            await self.pool.close()
            self.pool = None

    async def save(self, grid: GridStore, criteria: Optional[CellPredicate] = None) -> int:
        assert self.pool is not None, "Persistence not initialized"

        records = _select(grid, criteria)
        log_info(f"  {TAG_INFO} [Postgres] {len(records)} records queued for {self.collection}")
        query = """
            INSERT INTO grid_cells (collection, u, v, data)
            VALUES ($1, $2, $3, $4::jsonb)
            ON CONFLICT (collection, u, v) DO UPDATE SET data = $4::jsonb
        """
        rows = [
            (self.collection, record.u, record.v, json.dumps(record.model_dump(mode="json")["data"]))
            for record in records
        ]
        async with self.pool.acquire() as conn:
            async with conn.transaction():
                await conn.executemany(query, rows)
        return len(records)

    async def load(self, bounds: Optional[GridBounds] = None) -> GridStore:
        assert self.pool is not None, "Persistence not initialized"

        window = bounds or GridBounds()
        query = """
            SELECT u, v, data FROM grid_cells
            WHERE collection = $1 AND u BETWEEN $2 AND $3 AND v BETWEEN $4 AND $5
            ORDER BY u, v
        """
        async with self.pool.acquire() as conn:
            rows = await conn.fetch(query, self.collection, window.i0, window.iN, window.j0, window.jN)

        records = [
            CellRecord(
                u=row["u"],
                v=row["v"],
                data=json.loads(row["data"]) if row["data"] is not None else None,
            )
            for row in rows
        ]
        grid = _assemble(records, window)
        log_success(f"  {TAG_SUCCESS} [Postgres] {len(grid)} grid cells loaded")
        return grid

    async def delete_all(self) -> None:
        assert self.pool is not None, "Persistence not initialized"
        async with self.pool.acquire() as conn:
            await conn.execute("DELETE FROM grid_cells WHERE collection = $1", self.collection)

    async def list_collections(self) -> List[str]:
        assert self.pool is not None, "Persistence not initialized"
        async with self.pool.acquire() as conn:
            rows = await conn.fetch("SELECT DISTINCT collection FROM grid_cells ORDER BY collection")
        return [row["collection"] for row in rows]
