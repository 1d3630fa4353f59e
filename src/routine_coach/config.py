"""
設定管理モジュール

関連クラス:
  - coach.RoutineCoach: AI生成設定を使用
  - ollama_client.OllamaClient: Ollama API設定を使用
  - server.dependencies: ストレージ・日付チェック設定を使用
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


@dataclass
class OllamaConfig:
    """Ollama API設定"""

    host: str = "http://localhost:11434"
    model: str = "qwen3:8b"


@dataclass
class DayCheckConfig:
    """日付切り替えチェック設定"""

    interval_seconds: int = 60  # 1分より粗くしない


@dataclass
class StorageConfig:
    """保存先設定"""

    db_path: Optional[str] = None  # 未指定時はdata/routine_tracker.db
    schema_file: Optional[str] = None  # 未指定時は組み込みスキーマ


@dataclass
class Config:
    """アプリケーション設定クラス"""

    # Ollama設定
    ollama: OllamaConfig = None  # type: ignore

    # 日付チェック設定
    day_check: DayCheckConfig = None  # type: ignore

    # 保存先設定
    storage: StorageConfig = None  # type: ignore

    # ログ設定
    log_level: str = "INFO"
    log_file: str = "logs/routine_tracker.log"

    # AI生成設定
    max_tokens: int = 2048
    temperature: float = 0.7
    context_days: int = 14  # コーチに渡す直近のログ日数
    history_limit: int = 10  # コーチに渡す直近の会話数

    def __post_init__(self):
        """デフォルト値の初期化"""
        if self.ollama is None:
            self.ollama = OllamaConfig()
        if self.day_check is None:
            self.day_check = DayCheckConfig()
        if self.storage is None:
            self.storage = StorageConfig()

    @classmethod
    def from_yaml(cls, config_path: Optional[Path] = None) -> "Config":
        """YAMLファイルから設定を読み込む

        Args:
            config_path: 設定ファイルパス（省略時はconfig/app_config.yamlを使用）

        Returns:
            Config: 設定インスタンス
        """
        if config_path is None:
            project_root = Path(__file__).parent.parent.parent
            config_path = project_root / "config" / "app_config.yaml"

        with open(config_path, "r", encoding="utf-8") as f:
            yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

        # YAML構造から設定を抽出
        ollama_data = yaml_data.get("ollama", {})
        day_check_data = yaml_data.get("day_check", {})
        storage_data = yaml_data.get("storage", {})
        log_data = yaml_data.get("log", {})
        ai_data = yaml_data.get("ai", {})

        return cls(
            ollama=OllamaConfig(
                host=ollama_data.get("host", "http://localhost:11434"),
                model=ollama_data.get("model", "qwen3:8b"),
            ),
            day_check=DayCheckConfig(
                interval_seconds=day_check_data.get("interval_seconds", 60),
            ),
            storage=StorageConfig(
                db_path=storage_data.get("db_path"),
                schema_file=storage_data.get("schema_file"),
            ),
            log_level=log_data.get("level", "INFO"),
            log_file=log_data.get("file", "logs/routine_tracker.log"),
            max_tokens=ai_data.get("max_tokens", 2048),
            temperature=ai_data.get("temperature", 0.7),
            context_days=ai_data.get("context_days", 14),
            history_limit=ai_data.get("history_limit", 10),
        )

    @classmethod
    def from_env(cls) -> "Config":
        """環境変数から設定を読み込む"""
        return cls(
            ollama=OllamaConfig(
                host=os.getenv("OLLAMA_HOST", "http://localhost:11434"),
                model=os.getenv("OLLAMA_MODEL", "qwen3:8b"),
            ),
            day_check=DayCheckConfig(
                interval_seconds=int(os.getenv("DAY_CHECK_INTERVAL", "60")),
            ),
            storage=StorageConfig(
                db_path=os.getenv("ROUTINE_TRACKER_DB_PATH"),
                schema_file=os.getenv("ROUTINE_TRACKER_SCHEMA_FILE"),
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE", "logs/routine_tracker.log"),
            max_tokens=int(os.getenv("MAX_TOKENS", "2048")),
            temperature=float(os.getenv("TEMPERATURE", "0.7")),
            context_days=int(os.getenv("COACH_CONTEXT_DAYS", "14")),
            history_limit=int(os.getenv("COACH_HISTORY_LIMIT", "10")),
        )
