"""Routine Log Models

日次ルーティン記録のデータモデル定義。

ActivityDefinition はスキーマ（正準定義）、ActivityRecord はある1日の記録、
DailyLog は1日分の記録列、LogCollection は全履歴を表す。
全て不変オブジェクトとして扱い、更新は常に新しい値を返す。

Related Classes: reconciler.reconcile, mutations.toggle_activity
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple


class ActivityType(str, Enum):
    """アクティビティのカテゴリ"""

    FOOD = "FOOD"
    EXERCISE = "EXERCISE"
    REST = "REST"


@dataclass(frozen=True, slots=True)
class ActivityRecord:
    """1日分のアクティビティ記録（完了フラグと詳細テキストを保持）"""

    id: str
    label: str
    type: ActivityType
    completed: bool = False
    details: str = ""
    placeholder: str = ""
    icon: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "label": self.label,
            "type": self.type.value,
            "completed": self.completed,
            "details": self.details,
            "placeholder": self.placeholder,
            "icon": self.icon,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ActivityRecord":
        """永続化済みの辞書から復元

        Raises:
            KeyError: id/label/typeが欠けている場合
            ValueError: typeまたはcompletedが不正な場合
        """
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise ValueError(f"completed must be a boolean, got {completed!r}")
        return cls(
            id=str(data["id"]),
            label=str(data["label"]),
            type=ActivityType(data["type"]),
            completed=completed,
            details=str(data.get("details") or ""),
            placeholder=str(data.get("placeholder") or ""),
            icon=str(data.get("icon") or ""),
        )


@dataclass(frozen=True, slots=True)
class ActivityDefinition:
    """正準スキーマの1エントリ。idはアプリのバージョンを跨いで不変。"""

    id: str
    label: str
    type: ActivityType
    placeholder: str = ""
    icon: str = ""

    def instantiate(self) -> ActivityRecord:
        """未完了・詳細なしの新しい記録を生成"""
        return ActivityRecord(
            id=self.id,
            label=self.label,
            type=self.type,
            completed=False,
            details="",
            placeholder=self.placeholder,
            icon=self.icon,
        )


@dataclass(frozen=True, slots=True)
class DailyLog:
    """1日分のログ。dateはローカル日付（YYYY-MM-DD）。"""

    date: str
    activities: Tuple[ActivityRecord, ...] = ()

    def activity_ids(self) -> List[str]:
        return [activity.id for activity in self.activities]

    def find(self, activity_id: str) -> Optional[ActivityRecord]:
        for activity in self.activities:
            if activity.id == activity_id:
                return activity
        return None

    @property
    def completed_count(self) -> int:
        return sum(1 for activity in self.activities if activity.completed)

    @property
    def total_count(self) -> int:
        return len(self.activities)

    @property
    def progress_percent(self) -> float:
        if not self.activities:
            return 0.0
        return self.completed_count / self.total_count * 100

    def with_activities(self, activities: Iterable[ActivityRecord]) -> "DailyLog":
        return replace(self, activities=tuple(activities))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "activities": [activity.to_dict() for activity in self.activities],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DailyLog":
        return cls(
            date=str(data["date"]),
            activities=tuple(ActivityRecord.from_dict(item) for item in data["activities"]),
        )


@dataclass(frozen=True, slots=True)
class LogCollection:
    """全日次ログの集合（1日付につき最大1件、挿入順を保持）"""

    logs: Tuple[DailyLog, ...] = ()

    def __len__(self) -> int:
        return len(self.logs)

    def __iter__(self):
        return iter(self.logs)

    def get(self, date: str) -> Optional[DailyLog]:
        for log in self.logs:
            if log.date == date:
                return log
        return None

    def dates(self) -> List[str]:
        return [log.date for log in self.logs]

    def append(self, log: DailyLog) -> "LogCollection":
        return LogCollection(logs=self.logs + (log,))

    def replace_log(self, log: DailyLog) -> "LogCollection":
        """同じ日付のログを差し替えた新しいコレクションを返す（他の日付はそのまま）"""
        return LogCollection(
            logs=tuple(log if existing.date == log.date else existing for existing in self.logs)
        )

    def sorted_logs(self, reverse: bool = False) -> List[DailyLog]:
        # YYYY-MM-DD は文字列比較で日付順になる
        return sorted(self.logs, key=lambda log: log.date, reverse=reverse)

    def recent(self, count: int) -> List[DailyLog]:
        """日付の新しい順にcount件取り、古い順に並べ直して返す"""
        if count <= 0:
            return []
        latest = self.sorted_logs(reverse=True)[:count]
        latest.reverse()
        return latest

    def to_list(self) -> List[Dict[str, Any]]:
        return [log.to_dict() for log in self.logs]

    @classmethod
    def from_list(cls, items: Iterable[Dict[str, Any]]) -> "LogCollection":
        return cls(logs=tuple(DailyLog.from_dict(item) for item in items))


@dataclass(slots=True)
class UserProfile:
    """ログインユーザーのプロフィール"""

    name: str
    email: str
    photo_url: Optional[str] = field(default=None)

    @property
    def first_name(self) -> str:
        parts = self.name.split()
        return parts[0] if parts else ""

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "email": self.email}
        if self.photo_url:
            data["photoUrl"] = self.photo_url
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "UserProfile":
        return cls(
            name=str(data.get("name", "")),
            email=str(data.get("email", "")),
            photo_url=data.get("photoUrl") or data.get("photo_url"),
        )
