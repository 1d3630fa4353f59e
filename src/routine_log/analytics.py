"""
ログ集合の集計（期間別の推移データと合計値）

グラフ描画やPDF出力は行わず、表示層に渡す数値だけを作る。
- WEEK / MONTH: 日付順で直近7件 / 30件のログを日ごとに1点
- YEAR: 全ログを月ごとにまとめて1点
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, List

from .models import ActivityType, DailyLog, LogCollection


class TimeRange(str, Enum):
    """集計期間"""

    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


RANGE_DAYS = {
    TimeRange.WEEK: 7,
    TimeRange.MONTH: 30,
}

RANGE_LABELS = {
    TimeRange.WEEK: "直近7日間",
    TimeRange.MONTH: "直近30日間",
    TimeRange.YEAR: "年間履歴",
}


def logs_in_range(collection: LogCollection, time_range: TimeRange) -> List[DailyLog]:
    """期間に含まれるログを日付の古い順で返す（YEARは全件）"""
    logs = collection.sorted_logs()
    days = RANGE_DAYS.get(time_range)
    if days is None:
        return logs
    return logs[-days:]


def _daily_point(log: DailyLog) -> Dict[str, Any]:
    return {
        "date": log.date,
        "completed": log.completed_count,
        "total": log.total_count,
        "percent": log.progress_percent,
    }


def _monthly_points(logs: List[DailyLog]) -> List[Dict[str, Any]]:
    months: Dict[str, Dict[str, int]] = {}
    for log in logs:
        month = log.date[:7]
        bucket = months.setdefault(month, {"total": 0, "completed": 0, "count": 0})
        bucket["count"] += 1
        bucket["total"] += log.total_count
        bucket["completed"] += log.completed_count

    return [
        {
            "month": month,
            # 1日あたりの平均完了数
            "completed": round(bucket["completed"] / bucket["count"]),
            "percent": bucket["completed"] / bucket["total"] * 100 if bucket["total"] else 0.0,
        }
        for month, bucket in months.items()
    ]


def build_chart_data(collection: LogCollection, time_range: TimeRange) -> List[Dict[str, Any]]:
    """
    期間別の推移データを作成

    Args:
        collection: ログ集合
        time_range: 集計期間

    Returns:
        WEEK/MONTHは {date, completed, total, percent} のリスト、
        YEARは {month, completed, percent} のリスト（いずれも古い順）
    """
    logs = logs_in_range(collection, time_range)
    if time_range is TimeRange.YEAR:
        return _monthly_points(logs)
    return [_daily_point(log) for log in logs]


def summarize(collection: LogCollection, time_range: TimeRange) -> Dict[str, int]:
    """期間内の完了アクティビティ数と完了した運動系アクティビティ数を集計"""
    logs = logs_in_range(collection, time_range)
    total_completed = sum(log.completed_count for log in logs)
    total_workouts = sum(
        1
        for log in logs
        for activity in log.activities
        if activity.completed and activity.type is ActivityType.EXERCISE
    )
    return {
        "days": len(logs),
        "total_completed": total_completed,
        "total_workouts": total_workouts,
    }
