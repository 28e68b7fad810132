import json
from dataclasses import asdict, is_dataclass
from enum import Enum
from pathlib import Path
from typing import List

from loguru import logger

from websocketizer.config.rest_constants import JavaParsingConstants


def convert(obj):
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    if isinstance(obj, Enum):
        return obj.value
    if is_dataclass(obj):
        return {k: convert(v) for k, v in asdict(obj).items()}
    if isinstance(obj, (list, tuple)):
        return [convert(v) for v in obj]
    if isinstance(obj, dict):
        return {k: convert(v) for k, v in obj.items()}
    return obj


def read_file_content(file_path: Path) -> str:
    """Read file content with encoding fallback."""
    encodings = JavaParsingConstants.ENCODING_FALLBACKS
    for encoding in encodings[:-1]:
        try:
            with open(file_path, 'r', encoding=encoding) as f:
                return f.read()
        except UnicodeDecodeError:
            continue
    with open(file_path, 'r', encoding=encodings[-1]) as f:
        return f.read()


def export_json(records: List, output_path: Path, file_name: str) -> Path:
    """Export records to ``output_path/file_name`` as a JSON list."""
    output_path.mkdir(parents=True, exist_ok=True)
    target = output_path / file_name

    with open(target, "w", encoding="utf-8") as f:
        json.dump([convert(r) for r in records], f, indent=2, ensure_ascii=False)

    logger.info(f"Exported {len(records)} records to: {target}")
    return target


def export_blueprints(blueprints: List, output_path: Path) -> Path:
    if not blueprints:
        logger.warning("No blueprints to export")
    return export_json(blueprints, output_path, "blueprints.json")
