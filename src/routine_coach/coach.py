"""
ルーティンコーチ（ログ履歴に基づく会話と期間レポート）

生成テキストは解析・検証せずそのまま返す。
LLM呼び出しの失敗はここで捕捉して定型メッセージに置き換え、
ログ集合やトラッカー側には伝播させない。

関連:
- src/routine_coach/ollama_client.py: LLM推論
- src/routine_coach/prompt_templates.py: プロンプト組み立て
"""

import json
import logging
import threading
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from src.routine_log.analytics import TimeRange, logs_in_range
from src.routine_log.models import DailyLog, LogCollection, UserProfile

from .ollama_client import OllamaClient
from .prompt_templates import build_report_prompt, build_system_prompt

logger = logging.getLogger(__name__)

EMPTY_RESPONSE_MESSAGE = "今は回答を生成できませんでした。"
CHAT_ERROR_MESSAGE = (
    "申し訳ありません、メッセージの処理中に問題が発生しました。"
    "接続状況やOllamaサーバーの設定を確認してください。"
)
REPORT_ERROR_MESSAGE = "レポートの生成に失敗しました。しばらくしてから再度お試しください。"

# アプリ側のroleをOllamaのroleに対応付ける
ROLE_MAP = {"user": "user", "model": "assistant"}


@dataclass
class ChatMessage:
    """会話履歴の1メッセージ"""

    role: str  # "user" | "model"
    text: str
    id: str = field(default_factory=lambda: uuid.uuid4().hex)
    timestamp: float = field(default_factory=time.time)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self.id, "role": self.role, "text": self.text, "timestamp": self.timestamp}


def serialize_logs(logs: List[DailyLog]) -> str:
    return json.dumps([log.to_dict() for log in logs], ensure_ascii=False, indent=2)


class RoutineCoach:
    """ログ履歴を文脈にしてOllamaと会話するコーチ"""

    def __init__(
        self,
        ollama_client: Optional[OllamaClient] = None,
        context_days: int = 14,
        history_limit: int = 10,
    ):
        """
        初期化

        Args:
            ollama_client: Ollamaクライアント（テスト用にDI可能）
            context_days: システムプロンプトに含める直近のログ日数
            history_limit: 送信する直近の会話メッセージ数
        """
        self.ollama_client = ollama_client or OllamaClient()
        self.context_days = context_days
        self.history_limit = history_limit
        self._history: List[ChatMessage] = []
        self._lock = threading.Lock()

    @property
    def history(self) -> List[ChatMessage]:
        with self._lock:
            return list(self._history)

    def reset(self) -> None:
        """会話履歴をクリア"""
        with self._lock:
            self._history = []
        logger.info("Coach conversation reset")

    def chat(
        self,
        message: str,
        logs: LogCollection,
        user: Optional[UserProfile] = None,
    ) -> ChatMessage:
        """
        ユーザーメッセージを送信し、コーチの応答を履歴に追加して返す

        Args:
            message: ユーザーの入力
            logs: 現在のログ集合（直近context_days日分を文脈に使う）
            user: ログイン中のユーザー

        Returns:
            コーチの応答メッセージ（失敗時は定型メッセージ）
        """
        recent = logs.recent(self.context_days)
        system_prompt = build_system_prompt(
            user.name if user else None, serialize_logs(recent), self.context_days
        )

        with self._lock:
            previous = self._history[-self.history_limit:] if self.history_limit > 0 else []
            user_message = ChatMessage(role="user", text=message)
            self._history.append(user_message)

        messages = [{"role": ROLE_MAP[m.role], "content": m.text} for m in previous]
        messages.append({"role": "user", "content": message})

        try:
            text = self.ollama_client.chat(messages, system=system_prompt)
            reply_text = text or EMPTY_RESPONSE_MESSAGE
        except Exception as e:
            logger.error(f"Coach chat failed: {e}", exc_info=True)
            reply_text = CHAT_ERROR_MESSAGE

        reply = ChatMessage(role="model", text=reply_text)
        with self._lock:
            self._history.append(reply)
        return reply

    def generate_report(
        self,
        logs: LogCollection,
        time_range: TimeRange = TimeRange.WEEK,
        user_name: Optional[str] = None,
    ) -> str:
        """
        期間レポートを生成（会話履歴には追加しない）

        Args:
            logs: 現在のログ集合
            time_range: 対象期間
            user_name: 表示用のユーザー名

        Returns:
            Markdownのレポート文字列（失敗時は定型メッセージ）
        """
        selected = logs_in_range(logs, time_range)
        if not selected:
            return "分析できる記録がまだありません。まずは今日の記録から始めましょう！"

        prompt = build_report_prompt(time_range, serialize_logs(selected), user_name)
        system_prompt = build_system_prompt(
            user_name, serialize_logs(logs.recent(self.context_days)), self.context_days
        )
        logger.info(f"Generating {time_range.value} report from {len(selected)} logs")

        try:
            text = self.ollama_client.chat([{"role": "user", "content": prompt}], system=system_prompt)
            return text or EMPTY_RESPONSE_MESSAGE
        except Exception as e:
            logger.error(f"Coach report failed: {e}", exc_info=True)
            return REPORT_ERROR_MESSAGE
