# app/database.py
"""
Simple file-backed table store using CSV (preferred) or Excel (xlsx).
Provides the two primitives the reviews API needs: create a record and find
records by exact-match filters. Writes take a file lock so concurrent inserts
do not corrupt the table.

Every value is stored and read back as text. Callers convert types on the way
out, which keeps 64-bit ids exact (they never pass through a float column).

Usage:
    db = FileBackedDB(Path("data"), tables={"reviews": "reviews.csv"})
    db.create_record("reviews", {"shopDomain": "a.myshopify.com", ...})
    db.find_records("reviews", where={"shopDomain": "a.myshopify.com"}, order_by="createdAt", descending=True, limit=50)
"""

import os
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional
import pandas as pd
import uuid
from filelock import FileLock


class FileBackedDB:
    """
    Manages CSV / Excel files inside data_dir.
    Table name maps to a file name through `tables` (or you may pass a full filename).
    """

    def __init__(self, data_dir: Path, tables: Optional[Mapping[str, str]] = None):
        self.data_dir = Path(data_dir)
        self.tables = dict(tables or {})

    def _file_path(self, table: str) -> Path:
        """
        Resolve table -> file path. If table looks like a filename (has .csv/.xlsx),
        use it directly (relative to data_dir). Otherwise use the table mapping,
        else fallback to table + .csv
        """
        if table.endswith(".csv") or table.endswith(".xlsx"):
            return self.data_dir / Path(table)
        filename = self.tables.get(table, f"{table}.csv")
        return self.data_dir / Path(filename)

    def _lock_for(self, path: Path) -> FileLock:
        return FileLock(str(path) + ".lock")

    def _read_path(self, path: Path) -> pd.DataFrame:
        if not path.exists():
            return pd.DataFrame()
        # keep_default_na=False so literal text like "NA" survives a round trip
        if path.suffix.lower() in (".xls", ".xlsx"):
            return pd.read_excel(path, dtype=str, keep_default_na=False).fillna("")
        return pd.read_csv(path, dtype=str, keep_default_na=False).fillna("")

    def _write_path(self, path: Path, df: pd.DataFrame) -> None:
        """
        Write DataFrame to `path` WITHOUT acquiring the file lock.
        Use this only when the caller already holds the lock.
        The table is written to a sibling temp file and swapped in with os.replace,
        so unlocked readers see either the old or the new file, never a partial one.
        """
        path.parent.mkdir(parents=True, exist_ok=True)
        tmp = path.with_name(f".{path.stem}.tmp{path.suffix}")
        if path.suffix.lower() in (".xls", ".xlsx"):
            df.to_excel(tmp, index=False)
        else:
            df.to_csv(tmp, index=False)
        os.replace(tmp, path)

    def table_exists(self, table: str) -> bool:
        return self._file_path(table).exists()

    # --- high-level primitives ---

    def create_record(self, table: str, data: Dict[str, Any], id_field: str = "id") -> Dict[str, Any]:
        """
        Append a new record. If id_field is not present in `data`, one is generated (uuid4 hex).
        Returns the saved record (with id).
        """
        data = dict(data)
        if not data.get(id_field):
            data[id_field] = uuid.uuid4().hex
        # None is stored as an empty cell
        new_row = {k: ("" if v is None else str(v)) for k, v in data.items()}

        path = self._file_path(table)
        path.parent.mkdir(parents=True, exist_ok=True)
        with self._lock_for(path):
            df = self._read_path(path)
            if df.empty and len(df.columns) == 0:
                df = pd.DataFrame([new_row])
            else:
                df = pd.concat([df, pd.DataFrame([new_row])], ignore_index=True, sort=False).fillna("")
            self._write_path(path, df)
        return data

    def find_records(
        self,
        table: str,
        where: Optional[Mapping[str, Any]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
    ) -> List[Dict[str, str]]:
        """
        Return rows whose columns equal every value in `where` (compared as text),
        optionally sorted by one column and capped at `limit` rows.
        """
        df = self._read_path(self._file_path(table))
        if df.empty:
            return []
        for key, value in (where or {}).items():
            if key not in df.columns:
                return []
            df = df[df[key] == str(value)]
        if order_by and order_by in df.columns:
            df = df.sort_values(order_by, ascending=not descending, kind="stable")
        if limit is not None:
            df = df.head(limit)
        return df.to_dict(orient="records")
