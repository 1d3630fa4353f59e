"""
Ollama APIクライアントモジュール

関連クラス:
  - config.Config: Ollama設定を提供
  - coach.RoutineCoach: このクライアントを使用

コーチの応答はMarkdownの自由文なので、JSONモードは使わずテキストで返す。
"""

import logging
from typing import Dict, List, Optional

import ollama


class OllamaClient:
    """Ollama APIクライアント（テキスト応答）"""

    def __init__(
        self,
        host: str = "http://localhost:11434",
        model: str = "qwen3:8b",
        temperature: float = 0.7,
        max_tokens: int = 2048,
    ):
        """
        初期化

        Args:
            host: OllamaサーバーのURL
            model: 使用するモデル名
            temperature: 生成温度（0.0-1.0）
            max_tokens: 最大トークン数
        """
        self.host = host
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.logger = logging.getLogger(__name__)

        self.client = ollama.Client(host=host)

    def chat(
        self,
        messages: List[Dict[str, str]],
        system: Optional[str] = None,
    ) -> str:
        """
        チャット形式で会話し、応答テキストをそのまま返す

        Args:
            messages: メッセージのリスト [{"role": "user", "content": "..."}]
            system: システムプロンプト（指定時は先頭にsystemメッセージとして追加）

        Returns:
            モデルの応答テキスト（空の場合は空文字列）
        """
        payload = list(messages)
        if system:
            payload.insert(0, {"role": "system", "content": system})

        try:
            response = self.client.chat(
                model=self.model,
                messages=payload,
                stream=False,
                options={
                    "temperature": self.temperature,
                    "num_predict": self.max_tokens,
                },
            )
            return response["message"]["content"] or ""
        except Exception as e:
            self.logger.error(f"Ollama chat error: {e}")
            raise
