"""
日付切り替え検知用スケジューラーモジュール

関連クラス:
  - tracker.RoutineTracker: check_dayをコールバックとして登録する
"""

import logging
import threading
import time
from typing import Any, Callable, Dict, Optional

MAX_INTERVAL_SECONDS = 60


class DayRolloverScheduler:
    """日付チェックを定期実行するスケジューラークラス"""

    def __init__(
        self,
        check_callback: Callable[[], Any],
        interval_seconds: int = MAX_INTERVAL_SECONDS,
    ):
        """
        初期化

        Args:
            check_callback: 定期的に呼び出す日付チェック処理
            interval_seconds: 実行間隔（秒、1〜60）
        """
        self._validate_interval(interval_seconds)
        self.check_callback = check_callback
        self.interval_seconds = interval_seconds
        self.logger = logging.getLogger(__name__)

        # 状態管理
        self._running = False
        self._lock = threading.Lock()
        self._run_count = 0
        self._last_error: Optional[str] = None

        # スレッド
        self._thread: Optional[threading.Thread] = None

    @staticmethod
    def _validate_interval(interval_seconds: int) -> None:
        # 日付切り替えから1分以内に当日ログを作るため、60秒より粗くしない
        if not 1 <= interval_seconds <= MAX_INTERVAL_SECONDS:
            raise ValueError(
                f"Interval must be between 1 and {MAX_INTERVAL_SECONDS} seconds"
            )

    def start(self) -> None:
        """スケジューラーを開始（バックグラウンドスレッド起動）"""
        with self._lock:
            if self._running:
                self.logger.warning("Day rollover scheduler is already running")
                return

            self._running = True
            self._thread = threading.Thread(target=self._run_loop, daemon=True)
            self._thread.start()
            self.logger.info("Day rollover scheduler started")

    def stop(self) -> None:
        """スケジューラーを停止"""
        with self._lock:
            if not self._running:
                self.logger.debug("Day rollover scheduler is not running")
                return

            self._running = False
            self.logger.info("Stopping day rollover scheduler...")

        # スレッドの終了を待機
        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)
            self.logger.info("Day rollover scheduler stopped")

    def is_running(self) -> bool:
        with self._lock:
            return self._running

    def get_status(self) -> Dict[str, Any]:
        """現在の状態を取得"""
        with self._lock:
            return {
                "running": self._running,
                "interval_seconds": self.interval_seconds,
                "run_count": self._run_count,
                "last_error": self._last_error,
            }

    def set_interval(self, interval_seconds: int) -> None:
        """実行間隔を変更"""
        self._validate_interval(interval_seconds)

        with self._lock:
            self.interval_seconds = interval_seconds
            self.logger.info(f"Interval changed to {interval_seconds} seconds")

    def _run_loop(self) -> None:
        """
        メインループ（バックグラウンドスレッドで実行）

        interval_secondsごとに_run_taskを呼び出す
        """
        self.logger.info("Day rollover loop started")

        while True:
            with self._lock:
                if not self._running:
                    break
                interval = self.interval_seconds

            # 次の実行までスリープ（1秒ごとに停止確認）
            for _ in range(interval):
                with self._lock:
                    if not self._running:
                        return
                time.sleep(1)

            with self._lock:
                if not self._running:
                    break
            self._run_task()

        self.logger.info("Day rollover loop exited")

    def _run_task(self) -> None:
        """日付チェックを1回実行。例外はログに残し、ループは継続する。"""
        try:
            self.check_callback()
            with self._lock:
                self._run_count += 1
                self._last_error = None
        except Exception as e:
            self.logger.error(f"Day check failed: {e}", exc_info=True)
            with self._lock:
                self._last_error = str(e)
