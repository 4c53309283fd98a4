"""
SQLite persistence for sites, terrain analysis results and rainfall
predictions. All three tables are append-only from the service's side.
"""

import json
import logging
import sqlite3
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from suitability_factors.models import Location

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """A read or write against the result store failed."""


def _now() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResultStore:

    def __init__(self, db_path: str = "terrain_invest.db"):
        self.db_path = db_path
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _init_db(self):
        conn = self._connect()
        try:
            conn.executescript("""
                CREATE TABLE IF NOT EXISTS terrain_sites (
                    id TEXT PRIMARY KEY,
                    display_name TEXT,
                    lat REAL NOT NULL,
                    lon REAL NOT NULL
                );
                CREATE TABLE IF NOT EXISTS terrain_analysis_results (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    site_id TEXT,
                    site_name TEXT,
                    lat REAL NOT NULL,
                    lon REAL NOT NULL,
                    elevation_m REAL,
                    slope_deg REAL,
                    landuse TEXT,
                    nearest_road_m REAL,
                    rainfall_3d_mm REAL,
                    suitability_score REAL,
                    recommended_actions TEXT,
                    created_at TEXT NOT NULL
                );
                CREATE TABLE IF NOT EXISTS predictions (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    region_id TEXT,
                    model_id TEXT,
                    requested_by TEXT,
                    output TEXT,
                    created_at TEXT NOT NULL
                );
            """)
            conn.commit()
        finally:
            conn.close()

    # --- Sites ---

    def add_site(self, display_name: str, lat: float, lon: float,
                 site_id: Optional[str] = None) -> Location:
        site_id = str(site_id) if site_id is not None else uuid.uuid4().hex
        self._execute(
            "INSERT INTO terrain_sites (id, display_name, lat, lon) VALUES (?, ?, ?, ?)",
            (site_id, display_name, lat, lon)
        )
        return Location(id=site_id, display_name=display_name, lat=lat, lon=lon)

    def get_sites(self, site_ids: Optional[Iterable[Any]] = None) -> List[Location]:
        """Sites by id, or every stored site when no ids are given."""
        if site_ids is None:
            rows = self._query("SELECT id, display_name, lat, lon FROM terrain_sites ORDER BY rowid")
        else:
            ids = [str(i) for i in site_ids]
            if not ids:
                return []
            marks = ",".join("?" for _ in ids)
            rows = self._query(
                f"SELECT id, display_name, lat, lon FROM terrain_sites WHERE id IN ({marks}) ORDER BY rowid",
                ids
            )
        return [Location(id=r["id"], display_name=r["display_name"], lat=r["lat"], lon=r["lon"]) for r in rows]

    # --- Terrain analysis ---

    def save_analysis(self, record: Dict[str, Any]) -> Dict[str, Any]:
        """Insert one analysis result and return it as stored."""
        created_at = _now()
        row_id = self._execute(
            """INSERT INTO terrain_analysis_results
               (site_id, site_name, lat, lon, elevation_m, slope_deg, landuse,
                nearest_road_m, rainfall_3d_mm, suitability_score,
                recommended_actions, created_at)
               VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)""",
            (
                None if record.get("site_id") is None else str(record["site_id"]),
                record.get("site_name"),
                record["lat"],
                record["lon"],
                record.get("elevation_m"),
                record.get("slope_deg"),
                json.dumps(record.get("landuse") or []),
                record.get("nearest_road_m"),
                record.get("rainfall_3d_mm"),
                record.get("suitability_score"),
                json.dumps(record.get("recommended_actions") or []),
                created_at,
            )
        )
        rows = self._query("SELECT * FROM terrain_analysis_results WHERE id = ?", (row_id,))
        return self._analysis_row(rows[0])

    def list_analyses(self) -> List[Dict[str, Any]]:
        """All stored results, newest first."""
        rows = self._query("SELECT * FROM terrain_analysis_results ORDER BY created_at DESC, id DESC")
        return [self._analysis_row(r) for r in rows]

    @staticmethod
    def _analysis_row(row: sqlite3.Row) -> Dict[str, Any]:
        out = dict(row)
        out["landuse"] = json.loads(out["landuse"] or "[]")
        out["recommended_actions"] = json.loads(out["recommended_actions"] or "[]")
        return out

    # --- Predictions ---

    def save_prediction(self, region_id: str, model_id: str, requested_by: str,
                        output: Dict[str, Any]) -> Dict[str, Any]:
        created_at = _now()
        row_id = self._execute(
            "INSERT INTO predictions (region_id, model_id, requested_by, output, created_at) VALUES (?, ?, ?, ?, ?)",
            (region_id, model_id, requested_by, json.dumps(output), created_at)
        )
        rows = self._query("SELECT * FROM predictions WHERE id = ?", (row_id,))
        return self._prediction_row(rows[0])

    def list_predictions(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        sql = "SELECT * FROM predictions ORDER BY created_at DESC, id DESC"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (int(limit),)
        return [self._prediction_row(r) for r in self._query(sql, params)]

    @staticmethod
    def _prediction_row(row: sqlite3.Row) -> Dict[str, Any]:
        out = dict(row)
        out["output"] = json.loads(out["output"] or "{}")
        return out

    # --- Helpers ---

    def _execute(self, sql: str, params: Iterable[Any] = ()) -> int:
        try:
            conn = self._connect()
            try:
                cur = conn.execute(sql, tuple(params))
                conn.commit()
                return cur.lastrowid
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e

    def _query(self, sql: str, params: Iterable[Any] = ()) -> List[sqlite3.Row]:
        try:
            conn = self._connect()
            try:
                return conn.execute(sql, tuple(params)).fetchall()
            finally:
                conn.close()
        except sqlite3.Error as e:
            raise StorageError(str(e)) from e
