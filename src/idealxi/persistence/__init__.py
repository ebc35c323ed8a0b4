"""Persistence layer for player and formation documents."""

from __future__ import annotations

import logging
import os
import sqlite3
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional
from uuid import uuid4

from idealxi.models import Formation, MatchResult, Player


logger = logging.getLogger(__name__)

_DB_PATH_ENV = "IDEALXI_DB_PATH"


class RosterStore:
    """Simple SQLite-backed document store for players and formations."""

    def __init__(self, db_path: Path | str | None = None):
        self._use_uri = False
        env_db = os.getenv(_DB_PATH_ENV)
        if db_path is not None:
            self.db_path = Path(db_path)
        elif env_db:
            if env_db.startswith("file:"):
                self.db_path = env_db
                self._use_uri = True
            else:
                self.db_path = Path(env_db)
        else:
            self.db_path = Path("data") / "idealxi.sqlite"
        self._ensure_schema()

    def _connect(self) -> sqlite3.Connection:
        if isinstance(self.db_path, Path):
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
        try:
            conn = sqlite3.connect(self.db_path, uri=self._use_uri)
        except sqlite3.OperationalError:
            fallback_dir = Path(tempfile.gettempdir()) / "idealxi-runtime"
            fallback_dir.mkdir(parents=True, exist_ok=True)
            fallback = fallback_dir / "idealxi.sqlite"
            logger.warning("Unable to open %s; falling back to %s", self.db_path, fallback)
            conn = sqlite3.connect(fallback)
            self.db_path = fallback
            self._use_uri = False
            self._create_schema(conn)
        conn.row_factory = sqlite3.Row
        return conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            self._create_schema(conn)

    def _create_schema(self, conn: sqlite3.Connection) -> None:
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS players (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                document_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.execute(
            """
            CREATE TABLE IF NOT EXISTS formations (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                document_json TEXT NOT NULL,
                created_at TEXT NOT NULL,
                updated_at TEXT NOT NULL
            )
            """
        )
        conn.commit()

    def _upsert(self, table: str, doc_id: str, name: str, document_json: str) -> None:
        now = datetime.now(timezone.utc).isoformat()
        with self._connect() as conn:
            conn.execute(
                f"""
                INSERT INTO {table} (id, name, document_json, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?)
                ON CONFLICT(id) DO UPDATE SET
                    name = excluded.name,
                    document_json = excluded.document_json,
                    updated_at = excluded.updated_at
                """,
                (doc_id, name, document_json, now, now),
            )
            conn.commit()

    def _delete(self, table: str, doc_id: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute(f"DELETE FROM {table} WHERE id = ?", (doc_id,))
            conn.commit()
            return cursor.rowcount > 0

    # Players

    def save_player(self, player: Player) -> Player:
        self._upsert("players", player.player_id, player.name, player.model_dump_json())
        return player

    def save_players(self, players: List[Player]) -> None:
        for player in players:
            self.save_player(player)

    def get_player(self, player_id: str) -> Optional[Player]:
        with self._connect() as conn:
            row = conn.execute("SELECT document_json FROM players WHERE id = ?", (player_id,)).fetchone()
        if row is None:
            return None
        return Player.model_validate_json(row["document_json"])

    def list_players(self) -> List[Player]:
        """Players in creation order, which is the pool order selection sees."""

        with self._connect() as conn:
            rows = conn.execute("SELECT document_json FROM players ORDER BY created_at, rowid").fetchall()
        return [Player.model_validate_json(row["document_json"]) for row in rows]

    def delete_player(self, player_id: str) -> bool:
        return self._delete("players", player_id)

    # Formations

    def save_formation(self, formation: Formation) -> Formation:
        self._upsert("formations", formation.formation_id, formation.name, formation.model_dump_json())
        return formation

    def get_formation(self, formation_id: str) -> Optional[Formation]:
        with self._connect() as conn:
            row = conn.execute("SELECT document_json FROM formations WHERE id = ?", (formation_id,)).fetchone()
        if row is None:
            return None
        return Formation.model_validate_json(row["document_json"])

    def list_formations(self) -> List[Formation]:
        with self._connect() as conn:
            rows = conn.execute("SELECT document_json FROM formations ORDER BY created_at, rowid").fetchall()
        return [Formation.model_validate_json(row["document_json"]) for row in rows]

    def delete_formation(self, formation_id: str) -> bool:
        return self._delete("formations", formation_id)

    def add_match_result(
        self,
        formation_id: str,
        *,
        goals_for: int,
        goals_against: int,
        played_at: Optional[datetime] = None,
    ) -> Formation:
        formation = self.get_formation(formation_id)
        if formation is None:
            raise KeyError(f"Formation {formation_id!r} not found")
        result = MatchResult(
            match_id=uuid4().hex,
            goals_for=goals_for,
            goals_against=goals_against,
            played_at=played_at or datetime.now(timezone.utc),
        )
        updated = formation.model_copy(update={"matches": formation.matches + (result,)})
        return self.save_formation(updated)
