"""ルーティン記録CLI の動作テスト"""

import json
import subprocess
import sys
from pathlib import Path


def run_cli(args: list[str], db_path: Path) -> subprocess.CompletedProcess:
    """CLI実行ヘルパー"""
    cmd = [
        sys.executable,
        "-m",
        "src.routine_log.cli",
        "--db-path",
        str(db_path),
    ] + args
    return subprocess.run(
        cmd,
        capture_output=True,
        text=True,
        cwd=Path(__file__).parent.parent,
    )


def test_cli_today_creates_log(tmp_path):
    """当日ログの表示（初回は作成される）"""
    db_path = tmp_path / "cli_test.db"
    result = run_cli(["today", "--format", "json"], db_path)
    assert result.returncode == 0
    log = json.loads(result.stdout)
    assert [a["id"] for a in log["activities"]][0] == "SLEEP"
    assert log["total_count"] == 6
    assert log["completed_count"] == 0


def test_cli_toggle_and_details(tmp_path):
    """完了切り替えと詳細更新が保存されること"""
    db_path = tmp_path / "cli_test.db"

    result = run_cli(["toggle", "--id", "WORKOUT", "--format", "json"], db_path)
    assert result.returncode == 0
    assert json.loads(result.stdout)["completed"] is True

    result = run_cli(
        ["details", "--id", "BREAKFAST", "--text", "納豆ごはん", "--format", "json"], db_path
    )
    assert result.returncode == 0
    assert json.loads(result.stdout)["details"] == "納豆ごはん"

    result = run_cli(["today", "--format", "json"], db_path)
    log = json.loads(result.stdout)
    activities = {a["id"]: a for a in log["activities"]}
    assert activities["WORKOUT"]["completed"] is True
    assert activities["BREAKFAST"]["details"] == "納豆ごはん"


def test_cli_unknown_activity(tmp_path):
    """存在しないアクティビティはエラー"""
    db_path = tmp_path / "cli_test.db"
    result = run_cli(["toggle", "--id", "NAP"], db_path)
    assert result.returncode == 1
    assert "Error" in result.stderr


def test_cli_history_and_stats(tmp_path):
    """履歴と集計の出力"""
    db_path = tmp_path / "cli_test.db"
    run_cli(["toggle", "--id", "CARDIO"], db_path)

    result = run_cli(["history", "--format", "json"], db_path)
    assert result.returncode == 0
    assert len(json.loads(result.stdout)) == 1

    result = run_cli(["stats", "--range", "week", "--format", "json"], db_path)
    assert result.returncode == 0
    stats = json.loads(result.stdout)
    assert stats["summary"]["total_workouts"] == 1

    result = run_cli(["stats"], db_path)
    assert result.returncode == 0
    assert "直近7日間" in result.stdout
