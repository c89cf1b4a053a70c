"""SQLite persistence for speakers, words and the per-speaker word graph."""
from __future__ import annotations

import contextlib
import logging
import os
import re
import sqlite3
import threading
from typing import Iterator

from ..domain.errors import NeverSaid, SpeakerNotFound, StorageError
from ..domain.models import Arc, Node, Speaker, Word

logger = logging.getLogger(__name__)

_NODE_COLUMNS = '"id", "speaker_id", "word_id", "root", "root_frequency"'
_ARC_COLUMNS = '"id", "from_node_id", "to_node_id", "frequency"'


class SqliteBabblerRepository:
    """Graph store backed by a SQLite file.

    Each call opens its own connection and commits before returning, so a
    single call is atomic but a sequence of calls is not.
    """

    def __init__(
        self,
        *,
        db_path: str,
        table_prefix: str = "babbler_",
        logger_instance=None,
    ) -> None:
        self.logger = logger_instance or logger
        self.db_path = str(db_path or "").strip()
        if not self.db_path:
            raise ValueError("Babbler DB path is empty.")
        self.table_prefix = _normalize_prefix(table_prefix)
        self.speakers_table = f"{self.table_prefix}speakers"
        self.words_table = f"{self.table_prefix}words"
        self.nodes_table = f"{self.table_prefix}nodes"
        self.arcs_table = f"{self.table_prefix}arcs"
        self._db_lock = threading.Lock()
        self._schema_ready = False

    def ensure_schema(self) -> None:
        """Create the graph tables and indexes when missing."""
        with self._connection():
            pass

    # Vocabulary

    def get_or_create_word(self, text: str) -> Word:
        with self._connection() as connection:
            connection.execute(
                f'INSERT OR IGNORE INTO "{self.words_table}" ("word") VALUES (?)',
                (text,),
            )
            return self._select_word(connection, text)

    def get_word(self, text: str) -> Word:
        with self._connection() as connection:
            return self._select_word(connection, text)

    def get_word_by_id(self, word_id: int) -> Word:
        with self._connection() as connection:
            row = connection.execute(
                f'SELECT "id", "word" FROM "{self.words_table}" WHERE "id" = ?',
                (word_id,),
            ).fetchone()
        if row is None:
            raise StorageError(f"Word id {word_id} does not exist.")
        return Word(id=int(row[0]), text=str(row[1]))

    # Speakers

    def create_speaker(self, name: str) -> Speaker:
        with self._connection() as connection:
            cursor = connection.execute(
                f'INSERT INTO "{self.speakers_table}" ("name") VALUES (?)',
                (name,),
            )
            return Speaker(id=int(cursor.lastrowid), name=name)

    def get_speaker(self, name: str) -> Speaker:
        with self._connection() as connection:
            row = connection.execute(
                f'SELECT "id", "name" FROM "{self.speakers_table}" WHERE "name" = ? LIMIT 1',
                (name,),
            ).fetchone()
        if row is None:
            raise SpeakerNotFound(name)
        return Speaker(id=int(row[0]), name=str(row[1]))

    # Nodes

    def get_or_create_node(self, speaker: Speaker, word: Word) -> Node:
        with self._connection() as connection:
            connection.execute(
                f'INSERT OR IGNORE INTO "{self.nodes_table}" '
                '("speaker_id", "word_id", "root", "root_frequency") VALUES (?, ?, 0, 0)',
                (speaker.id, word.id),
            )
            node = self._select_node(connection, speaker.id, word.id)
        if node is None:
            raise StorageError(f"Failed to create node for word id {word.id}.")
        return node

    def get_node(self, speaker: Speaker, word: Word) -> Node:
        with self._connection() as connection:
            node = self._select_node(connection, speaker.id, word.id)
        if node is None:
            raise NeverSaid(f"{speaker.name} never said {word.text!r}")
        return node

    def get_node_by_id(self, node_id: int) -> Node:
        with self._connection() as connection:
            row = connection.execute(
                f'SELECT {_NODE_COLUMNS} FROM "{self.nodes_table}" WHERE "id" = ?',
                (node_id,),
            ).fetchone()
        if row is None:
            raise StorageError(f"Node id {node_id} does not exist.")
        return _node_from_row(row)

    def increment_root(self, node: Node, amount: int = 1) -> Node:
        _require_positive(amount)
        with self._connection() as connection:
            connection.execute(
                f'UPDATE "{self.nodes_table}" SET "root_frequency" = "root_frequency" + ?, '
                '"root" = 1 WHERE "id" = ?',
                (amount, node.id),
            )
            row = connection.execute(
                f'SELECT {_NODE_COLUMNS} FROM "{self.nodes_table}" WHERE "id" = ?',
                (node.id,),
            ).fetchone()
        if row is None:
            raise StorageError(f"Node id {node.id} does not exist.")
        return _node_from_row(row)

    def list_root_nodes(self, speaker: Speaker) -> list[Node]:
        with self._connection() as connection:
            cursor = connection.execute(
                f'SELECT {_NODE_COLUMNS} FROM "{self.nodes_table}" '
                'WHERE "speaker_id" = ? AND "root" = 1 ORDER BY "id"',
                (speaker.id,),
            )
            return [_node_from_row(row) for row in cursor.fetchall()]

    def list_nodes(self, speaker: Speaker) -> list[Node]:
        with self._connection() as connection:
            cursor = connection.execute(
                f'SELECT {_NODE_COLUMNS} FROM "{self.nodes_table}" '
                'WHERE "speaker_id" = ? ORDER BY "id"',
                (speaker.id,),
            )
            return [_node_from_row(row) for row in cursor.fetchall()]

    # Arcs

    def get_arc(self, from_node: Node, to_node: Node) -> Arc:
        with self._connection() as connection:
            arc = self._select_arc(connection, from_node.id, to_node.id)
        if arc is None:
            raise NeverSaid(f"no transition from node {from_node.id} to node {to_node.id}")
        return arc

    def increment_arc(self, from_node: Node, to_node: Node, amount: int = 1) -> Arc:
        _require_positive(amount)
        with self._connection() as connection:
            connection.execute(
                f'INSERT INTO "{self.arcs_table}" ("from_node_id", "to_node_id", "frequency") '
                "VALUES (?, ?, ?) "
                'ON CONFLICT("from_node_id", "to_node_id") DO UPDATE SET '
                '"frequency" = "frequency" + excluded."frequency"',
                (from_node.id, to_node.id, amount),
            )
            arc = self._select_arc(connection, from_node.id, to_node.id)
        if arc is None:
            raise StorageError(
                f"Failed to record transition {from_node.id} -> {to_node.id}."
            )
        return arc

    def list_arcs_from(self, node: Node) -> list[Arc]:
        with self._connection() as connection:
            cursor = connection.execute(
                f'SELECT {_ARC_COLUMNS} FROM "{self.arcs_table}" '
                'WHERE "from_node_id" = ? ORDER BY "id"',
                (node.id,),
            )
            return [_arc_from_row(row) for row in cursor.fetchall()]

    # Internals

    @contextlib.contextmanager
    def _connection(self) -> Iterator[sqlite3.Connection]:
        with self._db_lock:
            connection = None
            try:
                self._ensure_parent_dir()
                connection = sqlite3.connect(self.db_path)
                with connection:
                    self._ensure_schema_with_connection(connection)
                    yield connection
            except (sqlite3.Error, OSError) as exc:
                raise StorageError(f"Babbler DB operation failed: {exc}") from exc
            finally:
                if connection is not None:
                    connection.close()

    def _ensure_schema_with_connection(self, connection: sqlite3.Connection) -> None:
        if self._schema_ready:
            return
        connection.execute(self._sql_create_speakers_table())
        connection.execute(self._sql_create_words_table())
        connection.execute(self._sql_create_nodes_table())
        connection.execute(self._sql_create_arcs_table())
        for statement in self._sql_create_indexes():
            connection.execute(statement)
        self._schema_ready = True
        self.logger.debug("Babbler DB schema ready: path=%s", self.db_path)

    def _ensure_parent_dir(self) -> None:
        parent = os.path.dirname(os.path.abspath(self.db_path))
        if parent:
            os.makedirs(parent, exist_ok=True)

    def _select_word(self, connection: sqlite3.Connection, text: str) -> Word:
        row = connection.execute(
            f'SELECT "id", "word" FROM "{self.words_table}" WHERE "word" = ? LIMIT 1',
            (text,),
        ).fetchone()
        if row is None:
            raise NeverSaid(f"nobody ever said {text!r}")
        return Word(id=int(row[0]), text=str(row[1]))

    def _select_node(
        self,
        connection: sqlite3.Connection,
        speaker_id: int,
        word_id: int,
    ) -> Node | None:
        row = connection.execute(
            f'SELECT {_NODE_COLUMNS} FROM "{self.nodes_table}" '
            'WHERE "speaker_id" = ? AND "word_id" = ? LIMIT 1',
            (speaker_id, word_id),
        ).fetchone()
        return _node_from_row(row) if row is not None else None

    def _select_arc(
        self,
        connection: sqlite3.Connection,
        from_node_id: int,
        to_node_id: int,
    ) -> Arc | None:
        row = connection.execute(
            f'SELECT {_ARC_COLUMNS} FROM "{self.arcs_table}" '
            'WHERE "from_node_id" = ? AND "to_node_id" = ? LIMIT 1',
            (from_node_id, to_node_id),
        ).fetchone()
        return _arc_from_row(row) if row is not None else None

    def _sql_create_speakers_table(self) -> str:
        return f"""
CREATE TABLE IF NOT EXISTS "{self.speakers_table}" (
  "id" INTEGER PRIMARY KEY AUTOINCREMENT,
  "name" TEXT NOT NULL UNIQUE,
  "created_at" TEXT NOT NULL DEFAULT (datetime('now'))
)
""".strip()

    def _sql_create_words_table(self) -> str:
        return f"""
CREATE TABLE IF NOT EXISTS "{self.words_table}" (
  "id" INTEGER PRIMARY KEY AUTOINCREMENT,
  "word" TEXT NOT NULL UNIQUE
)
""".strip()

    def _sql_create_nodes_table(self) -> str:
        return f"""
CREATE TABLE IF NOT EXISTS "{self.nodes_table}" (
  "id" INTEGER PRIMARY KEY AUTOINCREMENT,
  "speaker_id" INTEGER NOT NULL,
  "word_id" INTEGER NOT NULL,
  "root" INTEGER NOT NULL DEFAULT 0,
  "root_frequency" INTEGER NOT NULL DEFAULT 0,
  UNIQUE ("speaker_id", "word_id"),
  FOREIGN KEY ("speaker_id") REFERENCES "{self.speakers_table}" ("id"),
  FOREIGN KEY ("word_id") REFERENCES "{self.words_table}" ("id")
)
""".strip()

    def _sql_create_arcs_table(self) -> str:
        return f"""
CREATE TABLE IF NOT EXISTS "{self.arcs_table}" (
  "id" INTEGER PRIMARY KEY AUTOINCREMENT,
  "from_node_id" INTEGER NOT NULL,
  "to_node_id" INTEGER NOT NULL,
  "frequency" INTEGER NOT NULL DEFAULT 0,
  UNIQUE ("from_node_id", "to_node_id"),
  FOREIGN KEY ("from_node_id") REFERENCES "{self.nodes_table}" ("id"),
  FOREIGN KEY ("to_node_id") REFERENCES "{self.nodes_table}" ("id")
)
""".strip()

    def _sql_create_indexes(self) -> list[str]:
        return [
            (
                f'CREATE INDEX IF NOT EXISTS "{self.nodes_table}_root_idx" '
                f'ON "{self.nodes_table}" ("speaker_id", "root")'
            ),
            (
                f'CREATE INDEX IF NOT EXISTS "{self.arcs_table}_from_idx" '
                f'ON "{self.arcs_table}" ("from_node_id")'
            ),
        ]


def _normalize_prefix(prefix: str) -> str:
    cleaned = re.sub(r"[^A-Za-z0-9_]", "", prefix or "babbler_")
    if not cleaned:
        return "babbler_"
    return cleaned


def _require_positive(amount: int) -> None:
    if int(amount) < 1:
        raise ValueError(f"Increment amount must be positive, got {amount}.")


def _node_from_row(row: tuple) -> Node:
    return Node(
        id=int(row[0]),
        speaker_id=int(row[1]),
        word_id=int(row[2]),
        is_root=bool(row[3]),
        root_frequency=int(row[4]),
    )


def _arc_from_row(row: tuple) -> Arc:
    return Arc(
        id=int(row[0]),
        from_node_id=int(row[1]),
        to_node_id=int(row[2]),
        frequency=int(row[3]),
    )
