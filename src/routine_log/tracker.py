"""
ルーティントラッカー本体（アプリケーションコントローラー）

LogCollectionの唯一の所有者。全ての変更は
「現在の集合から新しい集合を計算 → ロック下で差し替え → 全体を保存」
の順で行い、計算途中の状態が他のイベントから見えないようにする。

関連クラス:
  - repository.RoutineLogRepository: 読み込み・保存
  - scheduler.DayRolloverScheduler: check_dayの定期実行
  - reconciler.reconcile / mutations: 純粋な変換関数
"""

import logging
import threading
from typing import Callable, Optional, Sequence

from .models import ActivityDefinition, DailyLog, LogCollection, UserProfile
from .mutations import set_activity_details, toggle_activity
from .reconciler import local_today_str, reconcile
from .repository import RoutineLogRepository
from .scheduler import MAX_INTERVAL_SECONDS, DayRolloverScheduler
from .schema import DEFAULT_SCHEMA


class RoutineTracker:
    """日次ログの状態を保持し、リコンサイルとユーザー操作を仲介するクラス"""

    def __init__(
        self,
        repository: RoutineLogRepository,
        schema: Optional[Sequence[ActivityDefinition]] = None,
        clock: Callable[[], str] = local_today_str,
        check_interval_seconds: int = MAX_INTERVAL_SECONDS,
    ):
        """
        初期化

        Args:
            repository: ログ・プロフィールの永続化先
            schema: 正準スキーマ（省略時はDEFAULT_SCHEMA）
            clock: 当日キー（YYYY-MM-DD）を返す関数
            check_interval_seconds: 日付チェックの間隔（秒）
        """
        self.repository = repository
        self.schema = tuple(schema) if schema is not None else DEFAULT_SCHEMA
        self.clock = clock
        self.logger = logging.getLogger(__name__)

        self._lock = threading.RLock()
        self._logs = LogCollection()
        self._today = clock()
        self._initialized = False
        self.scheduler = DayRolloverScheduler(
            self.check_day, interval_seconds=check_interval_seconds
        )

    @property
    def today(self) -> str:
        with self._lock:
            return self._today

    def initialize(self, start_scheduler: bool = True) -> None:
        """保存済みログを読み込み、当日ログを保証して保存。必要ならスケジューラーを起動。"""
        with self._lock:
            loaded = self.repository.load_logs()
            self._today = self.clock()
            self._logs = loaded
            self._apply(reconcile(loaded, self._today, self.schema))
            self._initialized = True
            self.logger.info(
                f"Routine tracker initialized with {len(self._logs)} logs (today: {self._today})"
            )

        if start_scheduler:
            self.scheduler.start()

    def shutdown(self) -> None:
        """日付チェックの定期実行を停止"""
        self.scheduler.stop()
        self.logger.info("Routine tracker shut down")

    def check_day(self) -> bool:
        """
        当日キーを再計算し、当日ログの存在とスキーマ整合を保証する

        Returns:
            ログ集合が変化した場合True
        """
        with self._lock:
            current = self.clock()
            if current != self._today:
                self.logger.info(f"Date changed: {self._today} -> {current}")
                self._today = current
            return self._apply(reconcile(self._logs, self._today, self.schema))

    def snapshot(self) -> LogCollection:
        """現在のログ集合（不変オブジェクト）を返す"""
        with self._lock:
            return self._logs

    def current_log(self) -> DailyLog:
        """当日のログを返す（未作成ならリコンサイルしてから返す）"""
        with self._lock:
            log = self._logs.get(self._today)
            if log is None:
                self.check_day()
                log = self._logs.get(self._today)
            return log

    def toggle(self, activity_id: str) -> Optional[DailyLog]:
        """
        当日ログの指定アクティビティの完了状態を反転

        Returns:
            更新後の当日ログ。当日ログに該当IDが無い場合はNone（何も変更しない）
        """
        with self._lock:
            if not self.has_activity(activity_id):
                return None
            self._apply(toggle_activity(self._logs, self._today, activity_id))
            return self.current_log()

    def update_details(self, activity_id: str, details: str) -> Optional[DailyLog]:
        """当日ログの指定アクティビティの詳細テキストを更新（該当IDが無ければNone）"""
        with self._lock:
            if not self.has_activity(activity_id):
                return None
            self._apply(set_activity_details(self._logs, self._today, activity_id, details))
            return self.current_log()

    def has_activity(self, activity_id: str) -> bool:
        with self._lock:
            return self.current_log().find(activity_id) is not None

    def get_user(self) -> Optional[UserProfile]:
        return self.repository.load_user()

    def login(self, profile: UserProfile) -> UserProfile:
        self.repository.save_user(profile)
        self.logger.info("User profile saved")
        return profile

    def logout(self) -> None:
        self.repository.clear_user()
        self.logger.info("User profile cleared")

    def _apply(self, updated: LogCollection) -> bool:
        """新しい集合に差し替えて保存。呼び出し側でロックを保持していること。"""
        if updated is self._logs and self._initialized:
            return False
        self._logs = updated
        self.repository.save_logs(updated)
        return True
