"""
正準アクティビティスキーマの提供モジュール

スキーマは順序付きのActivityDefinition列で、今後エントリが追加されうる。
reconcilerには常に引数として渡し、ここで定義したDEFAULT_SCHEMAを
直接参照させないこと。
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import ActivityDefinition, ActivityType

logger = logging.getLogger(__name__)

Schema = Sequence[ActivityDefinition]

DEFAULT_SCHEMA: tuple[ActivityDefinition, ...] = (
    ActivityDefinition(
        id="SLEEP",
        label="睡眠時間",
        type=ActivityType.REST,
        placeholder="何時間眠りましたか？",
        icon="😴",
    ),
    ActivityDefinition(
        id="BREAKFAST",
        label="朝食",
        type=ActivityType.FOOD,
        placeholder="何を食べましたか？",
        icon="☕",
    ),
    ActivityDefinition(
        id="LUNCH",
        label="昼食",
        type=ActivityType.FOOD,
        placeholder="何を食べましたか？",
        icon="🥗",
    ),
    ActivityDefinition(
        id="DINNER",
        label="夕食",
        type=ActivityType.FOOD,
        placeholder="何を食べましたか？",
        icon="🍽️",
    ),
    ActivityDefinition(
        id="WORKOUT",
        label="トレーニング",
        type=ActivityType.EXERCISE,
        placeholder="どんなトレーニングをしましたか？",
        icon="💪",
    ),
    ActivityDefinition(
        id="CARDIO",
        label="有酸素運動",
        type=ActivityType.EXERCISE,
        placeholder="時間または距離は？",
        icon="🏃",
    ),
)


def _definition_from_dict(data: Dict[str, Any]) -> ActivityDefinition:
    if not isinstance(data, dict) or "id" not in data or "type" not in data:
        raise ValueError(f"Activity definition needs id and type: {data!r}")
    try:
        activity_type = ActivityType(str(data["type"]).upper())
    except ValueError:
        raise ValueError(f"Unknown activity type: {data['type']}")
    return ActivityDefinition(
        id=str(data["id"]),
        label=str(data.get("label", data["id"])),
        type=activity_type,
        placeholder=str(data.get("placeholder", "")),
        icon=str(data.get("icon", "")),
    )


def load_schema(schema_path: Optional[Path] = None) -> List[ActivityDefinition]:
    """
    YAMLファイルから正準スキーマを読み込む

    ファイル形式:
        activities:
          - id: SLEEP
            label: 睡眠時間
            type: REST
            placeholder: 何時間眠りましたか？
            icon: "😴"

    Args:
        schema_path: スキーマファイルのパス（省略時・存在しない場合はDEFAULT_SCHEMA）

    Returns:
        順序付きのActivityDefinitionリスト

    Raises:
        ValueError: スキーマ定義が不正な場合（idの重複・不正なtypeなど）
    """
    if schema_path is None or not Path(schema_path).exists():
        if schema_path is not None:
            logger.warning(f"Schema file not found: {schema_path}, using default schema")
        return list(DEFAULT_SCHEMA)

    with open(schema_path, "r", encoding="utf-8") as f:
        yaml_data: Dict[str, Any] = yaml.safe_load(f) or {}

    if not isinstance(yaml_data, dict):
        raise ValueError(f"Schema file must be a mapping: {schema_path}")
    entries = yaml_data.get("activities") or []
    if not isinstance(entries, list) or not entries:
        raise ValueError(f"No activities defined in {schema_path}")

    definitions = [_definition_from_dict(entry) for entry in entries]

    seen: set[str] = set()
    for definition in definitions:
        if definition.id in seen:
            raise ValueError(f"Duplicate activity id in schema: {definition.id}")
        seen.add(definition.id)

    logger.info(f"Loaded {len(definitions)} activity definitions from {schema_path}")
    return definitions
