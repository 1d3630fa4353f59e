"""DayRolloverSchedulerのテストコード"""

import time
from unittest.mock import MagicMock

import pytest

from src.routine_log.scheduler import DayRolloverScheduler


@pytest.fixture
def mock_callback():
    """モックの日付チェック処理"""
    return MagicMock(return_value=False)


def test_scheduler_start_stop(mock_callback):
    """スケジューラーの開始/停止が正常に動作することを確認"""
    scheduler = DayRolloverScheduler(mock_callback)

    scheduler.start()
    assert scheduler.get_status()["running"] is True

    scheduler.stop()
    assert scheduler.get_status()["running"] is False


def test_start_twice_is_ignored(mock_callback):
    """二重起動してもスレッドは1つだけであることを確認"""
    scheduler = DayRolloverScheduler(mock_callback)
    scheduler.start()
    thread = scheduler._thread

    scheduler.start()
    assert scheduler._thread is thread

    scheduler.stop()


def test_get_status(mock_callback):
    """ステータス取得が正常に動作することを確認"""
    scheduler = DayRolloverScheduler(mock_callback, interval_seconds=30)

    status = scheduler.get_status()

    assert status["running"] is False
    assert status["interval_seconds"] == 30
    assert status["run_count"] == 0
    assert status["last_error"] is None


def test_set_interval(mock_callback):
    """実行間隔の変更と範囲チェックを確認"""
    scheduler = DayRolloverScheduler(mock_callback)

    # デフォルトは60秒
    assert scheduler.get_status()["interval_seconds"] == 60

    scheduler.set_interval(10)
    assert scheduler.get_status()["interval_seconds"] == 10

    # 1分より粗い間隔、0以下はエラー
    with pytest.raises(ValueError):
        scheduler.set_interval(61)
    with pytest.raises(ValueError):
        scheduler.set_interval(0)


def test_invalid_initial_interval(mock_callback):
    with pytest.raises(ValueError):
        DayRolloverScheduler(mock_callback, interval_seconds=300)


def test_run_task_calls_callback(mock_callback):
    """タスク実行でコールバックが呼ばれることを確認"""
    scheduler = DayRolloverScheduler(mock_callback)

    scheduler._run_task()
    scheduler._run_task()

    assert mock_callback.call_count == 2
    assert scheduler.get_status()["run_count"] == 2


def test_error_handling_in_task(mock_callback):
    """コールバックで例外が起きてもクラッシュしないことを確認"""
    mock_callback.side_effect = Exception("テストエラー")
    scheduler = DayRolloverScheduler(mock_callback)

    scheduler._run_task()

    status = scheduler.get_status()
    assert status["last_error"] == "テストエラー"
    assert status["run_count"] == 0


def test_loop_runs_periodically(mock_callback):
    """起動中は間隔ごとにコールバックが呼ばれることを確認"""
    scheduler = DayRolloverScheduler(mock_callback, interval_seconds=1)
    scheduler.start()

    deadline = time.time() + 5
    while mock_callback.call_count == 0 and time.time() < deadline:
        time.sleep(0.1)

    scheduler.stop()
    assert mock_callback.call_count >= 1


def test_stop_during_sleep_skips_pending_check(mock_callback, monkeypatch):
    """待機中に停止された場合、次の日付チェックを実行しないことを確認"""
    scheduler = DayRolloverScheduler(mock_callback, interval_seconds=1)

    def stop_while_sleeping(_seconds):
        scheduler._running = False

    monkeypatch.setattr("src.routine_log.scheduler.time.sleep", stop_while_sleeping)
    scheduler._running = True

    scheduler._run_loop()

    mock_callback.assert_not_called()
    assert scheduler.get_status()["run_count"] == 0
