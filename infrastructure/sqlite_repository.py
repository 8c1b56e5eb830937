"""SQLite-backed task store.

One connection shared across threads (the UI runs every store call on a single
worker thread, but startup reads happen on the main thread), serialised with
an RLock. Every driver error surfaces as ``core.DataError``.
"""

import logging
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Sequence

from application.ports import TaskStore
from core import Comment, DataError, DEFAULT_TAG_COLOR, Project, Tag, TagGroup, Task
from infrastructure.db_path_resolver import get_db_path
from infrastructure.schema import SCHEMA_SQL, seed_rows

logger = logging.getLogger("stm.store")

_TASK_COLUMNS = "t.id, t.project_id, t.title, t.description, t.notes, t.priority, t.created_at, t.updated_at"
_TAG_COLUMNS = "id, name, color, tag_group_id, created_at"


def _now() -> str:
    return datetime.now().isoformat(timespec="microseconds")


def _parse_ts(value: Optional[str]) -> datetime:
    if not value:
        return datetime.min
    try:
        return datetime.fromisoformat(str(value))
    except ValueError:
        return datetime.min


def _contains_ci(haystack: Optional[str], needle: Optional[str]) -> int:
    if not needle:
        return 1
    return int(needle.casefold() in (haystack or "").casefold())


class SqliteTaskStore(TaskStore):
    def __init__(self, db_path: Path | str | None = None):
        if str(db_path) == ":memory:":
            self.db_path = Path(":memory:")
        else:
            self.db_path = get_db_path(Path(db_path) if db_path else None)
        self._lock = threading.RLock()
        self._connection: Optional[sqlite3.Connection] = None
        self._open()

    # ------------------------------------------------------------------ setup
    def _open(self) -> None:
        conn: Optional[sqlite3.Connection] = None
        try:
            if str(self.db_path) != ":memory:":
                self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), isolation_level=None, check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.execute("PRAGMA foreign_keys=ON")
            conn.create_function("contains_ci", 2, _contains_ci, deterministic=True)
            conn.executescript(SCHEMA_SQL)
            now = _now()
            for sql, params in seed_rows(now):
                conn.execute(sql, params)
        except (sqlite3.Error, OSError) as exc:
            if conn is not None:
                conn.close()
            raise DataError("open", str(exc)) from exc
        self._connection = conn
        logger.debug("schema ready at %s", self.db_path)

    def close(self) -> None:
        with self._lock:
            if self._connection is not None:
                self._connection.close()
                self._connection = None

    @contextmanager
    def _guard(self, operation: str) -> Iterator[sqlite3.Connection]:
        """Serialise access and translate driver errors into DataError."""
        with self._lock:
            if self._connection is None:
                raise DataError(operation, "store is closed")
            try:
                yield self._connection
            except sqlite3.Error as exc:
                raise DataError(operation, str(exc)) from exc

    @contextmanager
    def _transaction(self, operation: str) -> Iterator[sqlite3.Connection]:
        with self._guard(operation) as conn:
            conn.execute("BEGIN")
            try:
                yield conn
            except BaseException:
                conn.execute("ROLLBACK")
                raise
            conn.execute("COMMIT")

    # ------------------------------------------------------------- row mapping
    @staticmethod
    def _project(row: sqlite3.Row) -> Project:
        return Project(
            id=row["id"],
            title=row["title"],
            description=row["description"] or "",
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )

    @staticmethod
    def _tag(row: sqlite3.Row) -> Tag:
        return Tag(
            id=row["id"],
            name=row["name"],
            color=row["color"] or DEFAULT_TAG_COLOR,
            group_id=row["tag_group_id"],
            created_at=_parse_ts(row["created_at"]),
        )

    @staticmethod
    def _task(row: sqlite3.Row) -> Task:
        return Task(
            id=row["id"],
            project_id=row["project_id"],
            title=row["title"],
            description=row["description"] or "",
            notes=row["notes"] or "",
            priority=int(row["priority"] or 0),
            created_at=_parse_ts(row["created_at"]),
            updated_at=_parse_ts(row["updated_at"]),
        )

    @staticmethod
    def _comment(row: sqlite3.Row) -> Comment:
        return Comment(
            id=row["id"],
            task_id=row["task_id"],
            content=row["content"],
            created_at=_parse_ts(row["created_at"]),
        )

    def _attach_tags(self, conn: sqlite3.Connection, tasks: List[Task]) -> List[Task]:
        if not tasks:
            return tasks
        by_id: Dict[int, Task] = {task.id: task for task in tasks}
        placeholders = ",".join("?" for _ in by_id)
        rows = conn.execute(
            f"""
            SELECT tt.task_id AS task_id, t.id, t.name, t.color, t.tag_group_id, t.created_at
            FROM tags t JOIN task_tags tt ON t.id = tt.tag_id
            WHERE tt.task_id IN ({placeholders})
            ORDER BY t.name COLLATE NOCASE
            """,
            list(by_id),
        ).fetchall()
        for row in rows:
            by_id[row["task_id"]].tags.append(self._tag(row))
        return tasks

    @staticmethod
    def _require(row: Optional[sqlite3.Row], operation: str, what: str, ident: int) -> sqlite3.Row:
        if row is None:
            raise DataError(operation, f"{what} {ident} not found")
        return row

    # --------------------------------------------------------------- projects
    def create_project(self, title: str, description: str = "") -> Project:
        now = _now()
        with self._guard("create_project") as conn:
            cur = conn.execute(
                "INSERT INTO projects (title, description, created_at, updated_at) VALUES (?, ?, ?, ?)",
                (title, description, now, now),
            )
            project_id = cur.lastrowid
        return self.get_project(project_id)

    def get_project(self, project_id: int) -> Project:
        with self._guard("get_project") as conn:
            row = conn.execute("SELECT * FROM projects WHERE id = ?", (project_id,)).fetchone()
            return self._project(self._require(row, "get_project", "project", project_id))

    def list_projects(self) -> List[Project]:
        with self._guard("list_projects") as conn:
            rows = conn.execute("SELECT * FROM projects ORDER BY updated_at DESC, id DESC").fetchall()
            return [self._project(row) for row in rows]

    def update_project(self, project_id: int, title: str, description: str) -> None:
        with self._guard("update_project") as conn:
            conn.execute(
                "UPDATE projects SET title = ?, description = ?, updated_at = ? WHERE id = ?",
                (title, description, _now(), project_id),
            )

    def delete_project(self, project_id: int) -> None:
        with self._guard("delete_project") as conn:
            conn.execute("DELETE FROM projects WHERE id = ?", (project_id,))

    def project_count(self) -> int:
        with self._guard("project_count") as conn:
            return int(conn.execute("SELECT COUNT(*) FROM projects").fetchone()[0])

    # ------------------------------------------------------------------ tasks
    def create_task(self, project_id: int, title: str, description: str = "", priority: int = 0, notes: str = "") -> Task:
        now = _now()
        with self._guard("create_task") as conn:
            cur = conn.execute(
                """
                INSERT INTO tasks (project_id, title, description, notes, priority, created_at, updated_at)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                (project_id, title, description, notes, priority, now, now),
            )
            task_id = cur.lastrowid
        return self.get_task(task_id)

    def get_task(self, task_id: int) -> Task:
        with self._guard("get_task") as conn:
            row = conn.execute(f"SELECT {_TASK_COLUMNS} FROM tasks t WHERE t.id = ?", (task_id,)).fetchone()
            task = self._task(self._require(row, "get_task", "task", task_id))
            return self._attach_tags(conn, [task])[0]

    def list_tasks(self, project_id: int) -> List[Task]:
        return self.list_tasks_filtered(project_id)

    def list_tasks_filtered(
        self,
        project_id: int,
        search: str = "",
        tag_id: Optional[int] = None,
        exclude_tag_id: Optional[int] = None,
    ) -> List[Task]:
        query = f"SELECT DISTINCT {_TASK_COLUMNS} FROM tasks t"
        args: List[object] = []
        if tag_id is not None:
            query += " JOIN task_tags tt ON t.id = tt.task_id"
        query += " WHERE t.project_id = ?"
        args.append(project_id)
        if search:
            query += " AND (contains_ci(t.title, ?) OR contains_ci(t.description, ?))"
            args.extend([search, search])
        if tag_id is not None:
            query += " AND tt.tag_id = ?"
            args.append(tag_id)
        if exclude_tag_id is not None:
            query += " AND t.id NOT IN (SELECT task_id FROM task_tags WHERE tag_id = ?)"
            args.append(exclude_tag_id)
        query += " ORDER BY t.priority DESC, t.created_at DESC, t.id DESC"
        with self._guard("list_tasks_filtered") as conn:
            tasks = [self._task(row) for row in conn.execute(query, args).fetchall()]
            return self._attach_tags(conn, tasks)

    def update_task(self, task_id: int, title: str, description: str, notes: str, priority: int) -> None:
        with self._guard("update_task") as conn:
            cur = conn.execute(
                """
                UPDATE tasks SET title = ?, description = ?, notes = ?, priority = ?, updated_at = ?
                WHERE id = ?
                """,
                (title, description, notes, priority, _now(), task_id),
            )
            if cur.rowcount == 0:
                raise DataError("update_task", f"task {task_id} not found")

    def save_task_with_tags(
        self,
        project_id: int,
        task_id: Optional[int],
        title: str,
        description: str,
        notes: str,
        priority: int,
        remove_tag_ids: Sequence[int] = (),
        add_tag_ids: Sequence[int] = (),
    ) -> int:
        """Create (task_id None) or update a task and change its tags in one transaction.

        Tags are removed first, then added in order, so a later grouped tag
        evicts an earlier one. Any failure rolls the whole save back.
        """
        now = _now()
        with self._transaction("save_task") as conn:
            if task_id is None:
                cur = conn.execute(
                    """
                    INSERT INTO tasks (project_id, title, description, notes, priority, created_at, updated_at)
                    VALUES (?, ?, ?, ?, ?, ?, ?)
                    """,
                    (project_id, title, description, notes, priority, now, now),
                )
                task_id = cur.lastrowid
            else:
                cur = conn.execute(
                    """
                    UPDATE tasks SET title = ?, description = ?, notes = ?, priority = ?, updated_at = ?
                    WHERE id = ?
                    """,
                    (title, description, notes, priority, now, task_id),
                )
                if cur.rowcount == 0:
                    raise DataError("save_task", f"task {task_id} not found")
            for tag_id in remove_tag_ids:
                conn.execute("DELETE FROM task_tags WHERE task_id = ? AND tag_id = ?", (task_id, tag_id))
            for tag_id in add_tag_ids:
                self._attach_tag(conn, "save_task", task_id, tag_id)
        return task_id

    def delete_task(self, task_id: int) -> None:
        with self._guard("delete_task") as conn:
            conn.execute("DELETE FROM tasks WHERE id = ?", (task_id,))

    # ------------------------------------------------------------------- tags
    def create_tag_group(self, name: str) -> TagGroup:
        with self._guard("create_tag_group") as conn:
            cur = conn.execute("INSERT INTO tag_groups (name, created_at) VALUES (?, ?)", (name, _now()))
            group_id = cur.lastrowid
        return self.get_tag_group(group_id)

    def get_tag_group(self, group_id: int) -> TagGroup:
        with self._guard("get_tag_group") as conn:
            row = conn.execute("SELECT id, name, created_at FROM tag_groups WHERE id = ?", (group_id,)).fetchone()
            row = self._require(row, "get_tag_group", "tag group", group_id)
            return TagGroup(id=row["id"], name=row["name"], created_at=_parse_ts(row["created_at"]))

    def list_tag_groups(self) -> List[TagGroup]:
        with self._guard("list_tag_groups") as conn:
            rows = conn.execute("SELECT id, name, created_at FROM tag_groups ORDER BY name").fetchall()
            return [TagGroup(id=row["id"], name=row["name"], created_at=_parse_ts(row["created_at"])) for row in rows]

    def delete_tag_group(self, group_id: int) -> None:
        # Member tags survive ungrouped (ON DELETE SET NULL).
        with self._guard("delete_tag_group") as conn:
            conn.execute("DELETE FROM tag_groups WHERE id = ?", (group_id,))

    def create_tag(self, name: str, color: str = "", group_id: Optional[int] = None) -> Tag:
        with self._guard("create_tag") as conn:
            cur = conn.execute(
                "INSERT INTO tags (name, color, tag_group_id, created_at) VALUES (?, ?, ?, ?)",
                (name, color or DEFAULT_TAG_COLOR, group_id, _now()),
            )
            tag_id = cur.lastrowid
        return self.get_tag(tag_id)

    def get_tag(self, tag_id: int) -> Tag:
        with self._guard("get_tag") as conn:
            row = conn.execute(f"SELECT {_TAG_COLUMNS} FROM tags WHERE id = ?", (tag_id,)).fetchone()
            return self._tag(self._require(row, "get_tag", "tag", tag_id))

    def list_tags(self) -> List[Tag]:
        with self._guard("list_tags") as conn:
            rows = conn.execute(f"SELECT {_TAG_COLUMNS} FROM tags ORDER BY name COLLATE NOCASE").fetchall()
            return [self._tag(row) for row in rows]

    def list_tags_by_group(self, group_id: int) -> List[Tag]:
        with self._guard("list_tags_by_group") as conn:
            rows = conn.execute(
                f"SELECT {_TAG_COLUMNS} FROM tags WHERE tag_group_id = ? ORDER BY name COLLATE NOCASE",
                (group_id,),
            ).fetchall()
            return [self._tag(row) for row in rows]

    def update_tag(self, tag_id: int, name: str, color: str, group_id: Optional[int]) -> None:
        with self._guard("update_tag") as conn:
            conn.execute(
                "UPDATE tags SET name = ?, color = ?, tag_group_id = ? WHERE id = ?",
                (name, color or DEFAULT_TAG_COLOR, group_id, tag_id),
            )

    def delete_tag(self, tag_id: int) -> None:
        with self._guard("delete_tag") as conn:
            conn.execute("DELETE FROM tags WHERE id = ?", (tag_id,))

    def get_tag_by_name(self, name: str) -> Optional[Tag]:
        with self._guard("get_tag_by_name") as conn:
            row = conn.execute(
                f"SELECT {_TAG_COLUMNS} FROM tags WHERE LOWER(name) = LOWER(?)",
                ((name or "").strip(),),
            ).fetchone()
            return self._tag(row) if row is not None else None

    def get_task_tags(self, task_id: int) -> List[Tag]:
        with self._guard("get_task_tags") as conn:
            rows = conn.execute(
                """
                SELECT t.id, t.name, t.color, t.tag_group_id, t.created_at
                FROM tags t JOIN task_tags tt ON t.id = tt.tag_id
                WHERE tt.task_id = ?
                ORDER BY t.name COLLATE NOCASE
                """,
                (task_id,),
            ).fetchall()
            return [self._tag(row) for row in rows]

    def _attach_tag(self, conn: sqlite3.Connection, operation: str, task_id: int, tag_id: int) -> None:
        """Attach a tag; a grouped tag first evicts its siblings from the task."""
        row = conn.execute("SELECT tag_group_id FROM tags WHERE id = ?", (tag_id,)).fetchone()
        row = self._require(row, operation, "tag", tag_id)
        group_id = row["tag_group_id"]
        if group_id is not None:
            conn.execute(
                """
                DELETE FROM task_tags
                WHERE task_id = ? AND tag_id IN (SELECT id FROM tags WHERE tag_group_id = ?)
                """,
                (task_id, group_id),
            )
        conn.execute("INSERT OR IGNORE INTO task_tags (task_id, tag_id) VALUES (?, ?)", (task_id, tag_id))

    def add_tag_to_task(self, task_id: int, tag_id: int) -> None:
        with self._transaction("add_tag_to_task") as conn:
            self._attach_tag(conn, "add_tag_to_task", task_id, tag_id)

    def remove_tag_from_task(self, task_id: int, tag_id: int) -> None:
        with self._guard("remove_tag_from_task") as conn:
            conn.execute("DELETE FROM task_tags WHERE task_id = ? AND tag_id = ?", (task_id, tag_id))

    # --------------------------------------------------------------- comments
    def create_comment(self, task_id: int, content: str) -> Comment:
        with self._guard("create_comment") as conn:
            cur = conn.execute(
                "INSERT INTO comments (task_id, content, created_at) VALUES (?, ?, ?)",
                (task_id, content, _now()),
            )
            comment_id = cur.lastrowid
        return self.get_comment(comment_id)

    def get_comment(self, comment_id: int) -> Comment:
        with self._guard("get_comment") as conn:
            row = conn.execute("SELECT id, task_id, content, created_at FROM comments WHERE id = ?", (comment_id,)).fetchone()
            return self._comment(self._require(row, "get_comment", "comment", comment_id))

    def get_task_comments(self, task_id: int) -> List[Comment]:
        with self._guard("get_task_comments") as conn:
            rows = conn.execute(
                "SELECT id, task_id, content, created_at FROM comments WHERE task_id = ? ORDER BY created_at ASC, id ASC",
                (task_id,),
            ).fetchall()
            return [self._comment(row) for row in rows]

    def delete_comment(self, comment_id: int) -> None:
        with self._guard("delete_comment") as conn:
            conn.execute("DELETE FROM comments WHERE id = ?", (comment_id,))

    # --------------------------------------------------------------- settings
    def get_setting(self, key: str) -> str:
        with self._guard("get_setting") as conn:
            row = conn.execute("SELECT value FROM settings WHERE key = ?", (key,)).fetchone()
            return row["value"] if row is not None else ""

    def set_setting(self, key: str, value: str) -> None:
        with self._guard("set_setting") as conn:
            conn.execute(
                "INSERT INTO settings (key, value) VALUES (?, ?) ON CONFLICT(key) DO UPDATE SET value = excluded.value",
                (key, value),
            )


__all__ = ["SqliteTaskStore"]
