"""
日次ログのリコンサイル（当日ログの保証とスキーマ移行）

reconcile() は (LogCollection, 当日キー, スキーマ) の純粋関数で、I/Oを行わない。
- 当日のログが無ければ、スキーマ順に未完了の記録を並べて作成する
- 当日のログにスキーマのidが欠けていれば、欠けた分だけ記録を挿入する
- 当日以外のログ、既存記録の順序・完了状態・詳細には一切触れない

挿入位置: 欠けたエントリは、スキーマ上で直前にあたるエントリのうち当日ログに
存在する最も近いものの直後に入る。直前のエントリが1つも存在しなければ先頭。
したがってスキーマ先頭のエントリが欠けていれば必ず当日ログの先頭になる。

スキーマから削除されたidの記録（孤児）は、古い表示情報のまま位置も保持する。
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional, Sequence

from .models import ActivityDefinition, ActivityRecord, DailyLog, LogCollection


def local_today_str(now: Optional[datetime] = None) -> str:
    """ローカルタイムゾーンの日付をYYYY-MM-DD形式で返す（UTCへの変換はしない）"""
    current = now or datetime.now()
    return f"{current.year:04d}-{current.month:02d}-{current.day:02d}"


def build_daily_log(date: str, schema: Sequence[ActivityDefinition]) -> DailyLog:
    """スキーマ順に新しい記録を並べたDailyLogを生成"""
    return DailyLog(date=date, activities=tuple(d.instantiate() for d in schema))


def migrate_activities(
    activities: Sequence[ActivityRecord], schema: Sequence[ActivityDefinition]
) -> List[ActivityRecord]:
    """
    既存の記録列にスキーマで欠けているidの記録を挿入した新しいリストを返す

    Args:
        activities: 当日ログの既存記録（順序は保持される）
        schema: 正準スキーマ

    Returns:
        移行後の記録リスト。欠けが無ければ入力と同じ内容。
    """
    result = list(activities)
    cursor = 0
    for definition in schema:
        position = next(
            (index for index, record in enumerate(result) if record.id == definition.id),
            None,
        )
        if position is None:
            result.insert(cursor, definition.instantiate())
            cursor += 1
        else:
            cursor = position + 1
    return result


def reconcile(
    collection: LogCollection, today: str, schema: Sequence[ActivityDefinition]
) -> LogCollection:
    """
    当日ログの存在とスキーマ整合を保証した新しいLogCollectionを返す

    変更が不要な場合は入力のcollectionをそのまま返す（冪等）。

    Args:
        collection: 現在のログ集合（日付の重複が無いこと）
        today: 当日の日付キー（YYYY-MM-DD）
        schema: 正準スキーマ

    Returns:
        リコンサイル後のLogCollection
    """
    today_log = collection.get(today)
    if today_log is None:
        return collection.append(build_daily_log(today, schema))

    present = set(today_log.activity_ids())
    if all(definition.id in present for definition in schema):
        return collection

    migrated = migrate_activities(today_log.activities, schema)
    return collection.replace_log(today_log.with_activities(migrated))
