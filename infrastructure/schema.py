"""SQLite schema for the task store (applied idempotently on every open)."""

from core import DEFAULT_STATUS_TAGS, STATUS_GROUP_NAME

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS settings (
    key TEXT PRIMARY KEY,
    value TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS projects (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT DEFAULT '',
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);

-- Tags within one group are mutually exclusive on a task.
CREATE TABLE IF NOT EXISTS tag_groups (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE,
    created_at TEXT NOT NULL
);

CREATE TABLE IF NOT EXISTS tags (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL UNIQUE COLLATE NOCASE,
    color TEXT DEFAULT '#7aa2f7',
    tag_group_id INTEGER,
    created_at TEXT NOT NULL,
    FOREIGN KEY (tag_group_id) REFERENCES tag_groups(id) ON DELETE SET NULL
);

CREATE TABLE IF NOT EXISTS tasks (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    project_id INTEGER NOT NULL,
    title TEXT NOT NULL,
    description TEXT DEFAULT '',
    notes TEXT DEFAULT '',
    priority INTEGER DEFAULT 0 CHECK (priority >= 0 AND priority <= 10),
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL,
    FOREIGN KEY (project_id) REFERENCES projects(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS task_tags (
    task_id INTEGER NOT NULL,
    tag_id INTEGER NOT NULL,
    PRIMARY KEY (task_id, tag_id),
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE,
    FOREIGN KEY (tag_id) REFERENCES tags(id) ON DELETE CASCADE
);

CREATE TABLE IF NOT EXISTS comments (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    task_id INTEGER NOT NULL,
    content TEXT NOT NULL,
    created_at TEXT NOT NULL,
    FOREIGN KEY (task_id) REFERENCES tasks(id) ON DELETE CASCADE
);

CREATE INDEX IF NOT EXISTS idx_tasks_project_id ON tasks(project_id);
CREATE INDEX IF NOT EXISTS idx_tasks_priority_created ON tasks(priority DESC, created_at DESC);
CREATE INDEX IF NOT EXISTS idx_task_tags_task_id ON task_tags(task_id);
CREATE INDEX IF NOT EXISTS idx_task_tags_tag_id ON task_tags(tag_id);
CREATE INDEX IF NOT EXISTS idx_tags_group_id ON tags(tag_group_id);
CREATE INDEX IF NOT EXISTS idx_comments_task_id ON comments(task_id);
"""

SEED_GROUP_SQL = "INSERT OR IGNORE INTO tag_groups (name, created_at) VALUES (?, ?)"

SEED_TAG_SQL = """
INSERT OR IGNORE INTO tags (name, color, tag_group_id, created_at)
SELECT ?, ?, id, ? FROM tag_groups WHERE name = ?
"""


def seed_rows(now: str):
    """Yield (sql, params) pairs that seed the Status group and its tags."""
    yield SEED_GROUP_SQL, (STATUS_GROUP_NAME, now)
    for name, color in DEFAULT_STATUS_TAGS:
        yield SEED_TAG_SQL, (name, color, now, STATUS_GROUP_NAME)


__all__ = ["SCHEMA_SQL", "seed_rows"]
