from __future__ import annotations

import json
import logging
import os
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from .models import DailyLog, LogCollection, UserProfile

logger = logging.getLogger(__name__)

LOGS_KEY = "routine_tracker_data_v1"
USER_KEY = "routine_tracker_user_v1"


class KeyValueStore:
    """SQLiteベースの文字列キー・文字列値ストア。"""

    def __init__(self, db_path: Optional[Path] = None):
        root = Path(__file__).resolve().parents[2]
        default_path = root / "data" / "routine_tracker.db"
        env_path = os.getenv("ROUTINE_TRACKER_DB_PATH")
        if db_path:
            self.db_path = Path(db_path)
        elif env_path:
            self.db_path = Path(env_path)
        else:
            self.db_path = default_path
        self.db_path.parent.mkdir(parents=True, exist_ok=True)
        self._initialize()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        return conn

    def _initialize(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_store (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL
                )
                """
            )
            conn.commit()

    @staticmethod
    def _now() -> str:
        return datetime.now(timezone.utc).isoformat()

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute("SELECT value FROM kv_store WHERE key = ?", (key,)).fetchone()
        return row["value"] if row else None

    def set(self, key: str, value: str) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_store (key, value, updated_at)
                VALUES (?, ?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value, updated_at = excluded.updated_at
                """,
                (key, value, self._now()),
            )
            conn.commit()

    def delete(self, key: str) -> bool:
        with self._connect() as conn:
            cursor = conn.execute("DELETE FROM kv_store WHERE key = ?", (key,))
            conn.commit()
            return cursor.rowcount > 0


def _drop_duplicate_activities(log: DailyLog) -> DailyLog:
    """同じ日に重複したアクティビティIDは最初の記録だけを残す。"""
    kept = []
    seen: set[str] = set()
    for activity in log.activities:
        if activity.id in seen:
            logger.warning(f"Duplicate activity {activity.id} on {log.date} dropped while loading")
            continue
        seen.add(activity.id)
        kept.append(activity)

    if len(kept) == len(log.activities):
        return log
    return log.with_activities(kept)


class RoutineLogRepository:
    """ログ集合とユーザープロフィールを2つのキーで保存するリポジトリ。

    ログ集合は読み込み1回・変更のたびに全体を書き直す運用（部分更新なし）。
    """

    def __init__(self, store: Optional[KeyValueStore] = None, db_path: Optional[Path] = None):
        self.store = store or KeyValueStore(db_path=db_path)

    def load_logs(self) -> LogCollection:
        """保存済みのログ集合を読み込む

        JSONが壊れている・形式が不正な場合は空の集合として扱う（ログのみ出力）。
        同じ日付が複数ある場合は最初の1件だけを残す。
        """
        raw = self.store.get(LOGS_KEY)
        if not raw:
            return LogCollection()

        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError(f"Stored logs must be a list, got {type(items).__name__}")
            logs = [DailyLog.from_dict(item) for item in items]
        except (ValueError, KeyError, TypeError) as exc:
            logger.error(f"Failed to parse stored logs, starting with empty collection: {exc}")
            return LogCollection()

        unique: list[DailyLog] = []
        seen: set[str] = set()
        for log in logs:
            if log.date in seen:
                logger.warning(f"Duplicate log for {log.date} dropped while loading")
                continue
            seen.add(log.date)
            unique.append(_drop_duplicate_activities(log))

        return LogCollection(logs=tuple(unique))

    def save_logs(self, collection: LogCollection) -> None:
        self.store.set(LOGS_KEY, json.dumps(collection.to_list(), ensure_ascii=False))

    def load_user(self) -> Optional[UserProfile]:
        raw = self.store.get(USER_KEY)
        if not raw:
            return None
        try:
            return UserProfile.from_dict(json.loads(raw))
        except (ValueError, TypeError, AttributeError) as exc:
            logger.error(f"Failed to parse stored user profile: {exc}")
            return None

    def save_user(self, profile: UserProfile) -> None:
        self.store.set(USER_KEY, json.dumps(profile.to_dict(), ensure_ascii=False))

    def clear_user(self) -> bool:
        return self.store.delete(USER_KEY)
