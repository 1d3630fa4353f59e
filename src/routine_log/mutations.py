"""
当日ログに対するユーザー操作（完了トグル・詳細テキスト更新）

どちらも新しいLogCollectionを返し、当日以外のログには触れない。
該当するidの記録が無い場合は何もしない（入力をそのまま返す）。
"""

from __future__ import annotations

from dataclasses import replace
from typing import Callable

from .models import ActivityRecord, LogCollection


def _update_today(
    collection: LogCollection,
    today: str,
    activity_id: str,
    update: Callable[[ActivityRecord], ActivityRecord],
) -> LogCollection:
    today_log = collection.get(today)
    if today_log is None or today_log.find(activity_id) is None:
        return collection

    activities = [
        update(activity) if activity.id == activity_id else activity
        for activity in today_log.activities
    ]
    return collection.replace_log(today_log.with_activities(activities))


def toggle_activity(collection: LogCollection, today: str, activity_id: str) -> LogCollection:
    """当日ログ内の指定記録のcompletedを反転"""
    return _update_today(
        collection,
        today,
        activity_id,
        lambda activity: replace(activity, completed=not activity.completed),
    )


def set_activity_details(
    collection: LogCollection, today: str, activity_id: str, details: str
) -> LogCollection:
    """当日ログ内の指定記録のdetailsを置き換える"""
    return _update_today(
        collection,
        today,
        activity_id,
        lambda activity: replace(activity, details=details),
    )
