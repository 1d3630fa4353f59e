"""RoutineTrackerのテストコード"""

from unittest.mock import MagicMock

import pytest

from src.routine_log.models import LogCollection, UserProfile
from src.routine_log.reconciler import build_daily_log
from src.routine_log.repository import RoutineLogRepository
from src.routine_log.schema import DEFAULT_SCHEMA
from src.routine_log.tracker import RoutineTracker


class FakeClock:
    """テスト用に日付を切り替えられる時計"""

    def __init__(self, today: str):
        self.today = today

    def __call__(self) -> str:
        return self.today


@pytest.fixture
def repository(tmp_path):
    return RoutineLogRepository(db_path=tmp_path / "routine.db")


@pytest.fixture
def clock():
    return FakeClock("2024-01-01")


@pytest.fixture
def tracker(repository, clock):
    tracker = RoutineTracker(repository, clock=clock)
    tracker.initialize(start_scheduler=False)
    yield tracker
    tracker.shutdown()


def test_initialize_creates_and_persists_today(tracker, repository):
    """初期化で当日ログが作られ、保存されることを確認"""
    assert tracker.today == "2024-01-01"
    assert tracker.snapshot().dates() == ["2024-01-01"]
    assert len(tracker.current_log().activities) == 6
    assert repository.load_logs() == tracker.snapshot()


def test_initialize_migrates_stored_today(repository, clock):
    """保存済みの当日ログにSLEEPが無ければ先頭に追加されることを確認"""
    stored = build_daily_log("2024-01-01", DEFAULT_SCHEMA[1:])
    repository.save_logs(LogCollection(logs=(stored,)))

    tracker = RoutineTracker(repository, clock=clock)
    tracker.initialize(start_scheduler=False)

    assert tracker.current_log().activity_ids()[0] == "SLEEP"
    assert repository.load_logs().get("2024-01-01").activity_ids()[0] == "SLEEP"


def test_toggle_and_details_are_persisted(tracker, repository):
    """操作のたびに全体が保存されることを確認"""
    tracker.toggle("WORKOUT")
    tracker.update_details("WORKOUT", "スクワット 5x5")

    stored = repository.load_logs().get("2024-01-01").find("WORKOUT")
    assert stored.completed is True
    assert stored.details == "スクワット 5x5"


def test_toggle_unknown_activity_does_not_save(repository, clock):
    """変更が無い操作では保存しないことを確認"""
    repo = MagicMock(wraps=repository)
    tracker = RoutineTracker(repo, clock=clock)
    tracker.initialize(start_scheduler=False)
    saves = repo.save_logs.call_count

    assert tracker.toggle("UNKNOWN") is None
    assert tracker.update_details("UNKNOWN", "x") is None

    assert repo.save_logs.call_count == saves
    assert tracker.has_activity("UNKNOWN") is False


def test_toggle_returns_updated_log(tracker):
    """存在するIDの操作は更新後の当日ログを返すことを確認"""
    log = tracker.toggle("DINNER")
    assert log.date == "2024-01-01"
    assert log.find("DINNER").completed is True

    log = tracker.update_details("DINNER", "鍋")
    assert log.find("DINNER").details == "鍋"


def test_duplicate_activity_in_stored_day_toggles_once(repository, clock):
    """保存データに同じIDが重複していても、切り替えは1件だけに効くことを確認"""
    stored = build_daily_log("2024-01-01", DEFAULT_SCHEMA)
    extra = DEFAULT_SCHEMA[4].instantiate()
    repository.save_logs(
        LogCollection(logs=(stored.with_activities(stored.activities + (extra,)),))
    )

    tracker = RoutineTracker(repository, clock=clock)
    tracker.initialize(start_scheduler=False)
    log = tracker.toggle("WORKOUT")

    workouts = [a for a in log.activities if a.id == "WORKOUT"]
    assert len(workouts) == 1
    assert workouts[0].completed is True
    assert log.completed_count == 1


def test_day_rollover_creates_new_log(tracker, clock):
    """日付が変わった後のチェックで新しい日のログが作られることを確認"""
    tracker.toggle("SLEEP")
    assert tracker.check_day() is False

    clock.today = "2024-01-02"
    assert tracker.check_day() is True

    logs = tracker.snapshot()
    assert logs.dates() == ["2024-01-01", "2024-01-02"]
    new_log = logs.get("2024-01-02")
    assert new_log.activity_ids() == [d.id for d in DEFAULT_SCHEMA]
    assert all(not a.completed and a.details == "" for a in new_log.activities)
    # 前日の記録は残る
    assert logs.get("2024-01-01").find("SLEEP").completed is True


def test_mutations_target_new_day_after_rollover(tracker, clock):
    """日付切り替え後の操作は新しい日だけに適用されることを確認"""
    clock.today = "2024-01-02"
    tracker.check_day()

    tracker.toggle("CARDIO")

    logs = tracker.snapshot()
    assert logs.get("2024-01-02").find("CARDIO").completed is True
    assert logs.get("2024-01-01").find("CARDIO").completed is False


def test_scheduler_task_triggers_rollover(tracker, clock):
    """スケジューラーのタスクがcheck_dayを呼ぶことを確認"""
    clock.today = "2024-01-02"
    tracker.scheduler._run_task()

    assert tracker.snapshot().get("2024-01-02") is not None
    assert tracker.scheduler.get_status()["run_count"] == 1


def test_initialize_starts_and_shutdown_stops_scheduler(repository, clock):
    """初期化でスケジューラーが起動し、終了時に停止することを確認"""
    tracker = RoutineTracker(repository, clock=clock, check_interval_seconds=1)
    tracker.initialize()
    assert tracker.scheduler.is_running() is True

    tracker.shutdown()
    assert tracker.scheduler.is_running() is False


def test_snapshot_is_immutable_value(tracker):
    """取得済みのスナップショットは後の操作の影響を受けないことを確認"""
    before = tracker.snapshot()
    tracker.toggle("LUNCH")
    assert before.get("2024-01-01").find("LUNCH").completed is False
    assert tracker.snapshot().get("2024-01-01").find("LUNCH").completed is True


def test_login_logout(tracker):
    assert tracker.get_user() is None
    tracker.login(UserProfile(name="Taro Yamada", email="taro@example.com"))
    assert tracker.get_user().name == "Taro Yamada"
    tracker.logout()
    assert tracker.get_user() is None
