#!/usr/bin/env python3
"""
ルーティン記録CLI - 端末やスクリプトから当日の記録を操作するインターフェース

Usage:
    python -m src.routine_log.cli today [--format json|text]
    python -m src.routine_log.cli toggle --id WORKOUT [--format json|text]
    python -m src.routine_log.cli details --id BREAKFAST --text "オートミール" [--format json|text]
    python -m src.routine_log.cli history [--days 7] [--format json|text]
    python -m src.routine_log.cli stats [--range week|month|year] [--format json|text]
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Dict, Optional

from .analytics import RANGE_LABELS, TimeRange, build_chart_data, summarize
from .models import ActivityRecord, DailyLog
from .repository import RoutineLogRepository
from .tracker import RoutineTracker


def format_activity_text(activity: ActivityRecord) -> str:
    """アクティビティをテキスト形式で整形"""
    mark = "✅" if activity.completed else "⬜"
    details = activity.details.strip()
    suffix = f" - {details}" if details else ""
    return f"{mark} {activity.icon} [{activity.id}] {activity.label}{suffix}"


def format_log_text(log: DailyLog) -> str:
    """日次ログをテキスト形式で整形"""
    header = (
        f"{log.date} | {log.completed_count}/{log.total_count} "
        f"({round(log.progress_percent)}%)"
    )
    lines = [header] + [f"  {format_activity_text(a)}" for a in log.activities]
    return "\n".join(lines)


def format_log_json(log: DailyLog) -> Dict[str, Any]:
    """日次ログを辞書形式に変換"""
    data = log.to_dict()
    data["completed_count"] = log.completed_count
    data["total_count"] = log.total_count
    return data


def _print_log(log: DailyLog, output_format: str) -> None:
    if output_format == "json":
        print(json.dumps(format_log_json(log), ensure_ascii=False))
    else:
        print(format_log_text(log))


def cmd_today(tracker: RoutineTracker, output_format: str) -> int:
    """当日のログを表示"""
    _print_log(tracker.current_log(), output_format)
    return 0


def cmd_toggle(tracker: RoutineTracker, activity_id: str, output_format: str) -> int:
    """アクティビティの完了状態を切り替え"""
    log = tracker.toggle(activity_id)
    if log is None:
        print(f"Error: アクティビティ {activity_id} が見つかりません。", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps(log.find(activity_id).to_dict(), ensure_ascii=False))
    else:
        print(f"更新しました: {format_activity_text(log.find(activity_id))}")
    return 0


def cmd_details(
    tracker: RoutineTracker, activity_id: str, text: str, output_format: str
) -> int:
    """アクティビティの詳細テキストを更新"""
    log = tracker.update_details(activity_id, text)
    if log is None:
        print(f"Error: アクティビティ {activity_id} が見つかりません。", file=sys.stderr)
        return 1

    if output_format == "json":
        print(json.dumps(log.find(activity_id).to_dict(), ensure_ascii=False))
    else:
        print(f"更新しました: {format_activity_text(log.find(activity_id))}")
    return 0


def cmd_history(tracker: RoutineTracker, days: int, output_format: str) -> int:
    """直近のログを日付順に表示"""
    logs = tracker.snapshot().recent(days)
    if output_format == "json":
        print(json.dumps([format_log_json(log) for log in logs], ensure_ascii=False))
    else:
        if not logs:
            print("記録はありません。")
        for log in logs:
            print(format_log_text(log))
    return 0


def cmd_stats(tracker: RoutineTracker, range_name: str, output_format: str) -> int:
    """期間別の集計を表示"""
    time_range = TimeRange(range_name)
    collection = tracker.snapshot()
    summary = summarize(collection, time_range)
    points = build_chart_data(collection, time_range)

    if output_format == "json":
        print(
            json.dumps(
                {"range": time_range.value, "summary": summary, "points": points},
                ensure_ascii=False,
            )
        )
        return 0

    print(f"{RANGE_LABELS[time_range]}: {summary['days']}日分")
    print(f"完了したアクティビティ: {summary['total_completed']}")
    print(f"完了したトレーニング: {summary['total_workouts']}")
    for point in points:
        label = point.get("date") or point.get("month")
        print(f"  {label}: {point['completed']} ({round(point['percent'])}%)")
    return 0


def _add_format_argument(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--format",
        choices=["json", "text"],
        default="text",
        help="出力フォーマット（デフォルト: text）",
    )


def main(argv: Optional[list[str]] = None) -> int:
    """CLIエントリポイント"""
    parser = argparse.ArgumentParser(
        description="ルーティン記録CLI - 当日のアクティビティの記録と履歴の確認",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--db-path",
        type=str,
        help="SQLiteデータベースファイルのパス（デフォルト: data/routine_tracker.db）",
    )

    subparsers = parser.add_subparsers(dest="command", help="実行するコマンド", required=True)

    # today コマンド
    parser_today = subparsers.add_parser("today", help="当日のログを表示")
    _add_format_argument(parser_today)

    # toggle コマンド
    parser_toggle = subparsers.add_parser("toggle", help="完了状態を切り替え")
    parser_toggle.add_argument("--id", required=True, help="アクティビティID（例: WORKOUT）")
    _add_format_argument(parser_toggle)

    # details コマンド
    parser_details = subparsers.add_parser("details", help="詳細テキストを更新")
    parser_details.add_argument("--id", required=True, help="アクティビティID（例: BREAKFAST）")
    parser_details.add_argument("--text", required=True, help="詳細テキスト")
    _add_format_argument(parser_details)

    # history コマンド
    parser_history = subparsers.add_parser("history", help="直近のログを表示")
    parser_history.add_argument("--days", type=int, default=7, help="表示する日数（デフォルト: 7）")
    _add_format_argument(parser_history)

    # stats コマンド
    parser_stats = subparsers.add_parser("stats", help="期間別の集計を表示")
    parser_stats.add_argument(
        "--range",
        choices=[r.value for r in TimeRange],
        default=TimeRange.WEEK.value,
        help="集計期間（デフォルト: week）",
    )
    _add_format_argument(parser_stats)

    args = parser.parse_args(argv)

    # トラッカー初期化（CLIでは定期チェック不要）
    repository = RoutineLogRepository(db_path=args.db_path if args.db_path else None)
    tracker = RoutineTracker(repository)
    tracker.initialize(start_scheduler=False)

    # コマンド実行
    if args.command == "today":
        return cmd_today(tracker, args.format)
    elif args.command == "toggle":
        return cmd_toggle(tracker, args.id, args.format)
    elif args.command == "details":
        return cmd_details(tracker, args.id, args.text, args.format)
    elif args.command == "history":
        return cmd_history(tracker, args.days, args.format)
    elif args.command == "stats":
        return cmd_stats(tracker, args.range, args.format)
    else:
        print(f"Error: 不明なコマンド: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
