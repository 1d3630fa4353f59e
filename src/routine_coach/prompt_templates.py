"""
コーチ用プロンプトテンプレート

関連クラス:
  - coach.RoutineCoach: ここで組み立てたプロンプトを送信する
"""

from datetime import datetime
from typing import Optional

from src.routine_log.analytics import RANGE_LABELS, TimeRange

DEFAULT_USER_NAME = "ユーザー"

SYSTEM_PROMPT_TEMPLATE = """あなたは「ルーティンコーチ」です。栄養士・パーソナルトレーナー・習慣コーチとして、
高い専門性と共感力を持って利用者をサポートします。

利用者プロフィール:
名前: {user_name}

最近の記録（直近{context_days}日分）:
{logs_json}

ガイドライン:
1. 利用者のルーティン記録（睡眠・食事・トレーニング）にアクセスできます。回答はこのデータに基づいてください。
2. 前向きで励ましつつ、現実的なアドバイスをしてください。
3. 「今日」について聞かれたら、データ内の最新の日付を確認してください。
4. 回答はMarkdown形式で書いてください。
5. 詳しいレポートを求められない限り、回答は簡潔に（最大3段落）まとめてください。
6. 絵文字を使って会話を和やかにしてください。

レポートや分析を求められた場合は、習慣（トレーニングの継続性、睡眠の質など）を批判的に読み解き、改善案を提案してください。
"""

REPORT_PROMPT_TEMPLATE = """{user_name}さんの{range_label}のルーティン記録を分析してください。

記録データ:
{logs_json}

以下の構成でMarkdownのレポートを作成してください:
## 概要
## 良かった点
## 改善できる点
## 来週のアクションプラン
"""


def greeting_for_hour(hour: Optional[int] = None) -> str:
    """時刻に応じた挨拶（12時まで: おはよう、18時まで: こんにちは、以降: こんばんは）"""
    if hour is None:
        hour = datetime.now().hour
    if hour >= 18:
        return "こんばんは"
    if hour >= 12:
        return "こんにちは"
    return "おはようございます"


def build_system_prompt(
    user_name: Optional[str], logs_json: str, context_days: int = 14
) -> str:
    return SYSTEM_PROMPT_TEMPLATE.format(
        user_name=user_name or DEFAULT_USER_NAME,
        context_days=context_days,
        logs_json=logs_json,
    )


def build_report_prompt(
    time_range: TimeRange, logs_json: str, user_name: Optional[str] = None
) -> str:
    return REPORT_PROMPT_TEMPLATE.format(
        user_name=user_name or DEFAULT_USER_NAME,
        range_label=RANGE_LABELS[time_range],
        logs_json=logs_json,
    )
