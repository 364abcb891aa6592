"""Prompt pack export: writes a variant set to a timestamped JSON file."""

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from app.core.metrics import EXPORTS_WRITTEN
from app.prompt_engine.types import ExportRecord

logger = logging.getLogger(__name__)

DEFAULT_PROJECT_NAME = "prompt-pack"
EXPORTS_URL_PREFIX = "/exports"

_WHITESPACE = re.compile(r"\s+")
# Path separators never reach the filesystem; the file stays directly in export_dir
_SEPARATORS = re.compile(r"[\\/]")


@dataclass
class ExportResult:
    ok: bool
    file: str  # public URL path of the written file
    path: Path

    def to_response_dict(self) -> dict[str, Any]:
        return {"ok": self.ok, "file": self.file}


def export_filename(project_name: str, exported_at: datetime) -> str:
    """``<name with whitespace runs and path separators as _>_<epoch millis>.json``"""
    millis = int(exported_at.timestamp() * 1000)
    name = _SEPARATORS.sub("_", _WHITESPACE.sub("_", project_name))
    return f"{name}_{millis}.json"


def export_pack(
    export_dir: str | Path,
    project_name: str = DEFAULT_PROJECT_NAME,
    base_prompt: str | None = None,
    variations: list[dict[str, Any]] | None = None,
    metadata: dict[str, Any] | None = None,
) -> ExportResult:
    """Write the pack and return where it landed.

    Filesystem errors propagate. Two exports of the same project within one
    millisecond share a filename and the later one wins.
    """
    record = ExportRecord(
        base_prompt=base_prompt,
        variations=list(variations or []),
        metadata=dict(metadata or {}),
        exported_at=datetime.now(timezone.utc),
    )

    out_dir = Path(export_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    filename = export_filename(project_name, record.exported_at)
    out_path = out_dir / filename
    out_path.write_text(json.dumps(record.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")

    EXPORTS_WRITTEN.inc()
    logger.info("Exported %d variations to %s", len(record.variations), out_path)
    return ExportResult(ok=True, file=f"{EXPORTS_URL_PREFIX}/{filename}", path=out_path)
