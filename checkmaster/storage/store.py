"""Local JSON persistence for templates and the submission history.

The file is a small key-value document: one key per collection, each holding
the whole collection. Every save rewrites one key with a full snapshot and
leaves the other key as it was on disk.
"""
from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, Iterable, List

from checkmaster.core.errors import StoreError
from checkmaster.core.models import Submission, Template
from checkmaster.core.utils import get_config_value

logger = logging.getLogger(__name__)

TEMPLATES_KEY = "cm_templates"
SUBMISSIONS_KEY = "cm_submissions"
DEFAULT_STORE_PATH = Path("data") / "checkmaster.json"


def default_store_path() -> Path:
    return Path(get_config_value("CHECKMASTER_STORE", str(DEFAULT_STORE_PATH))).expanduser()


class JsonStore:
    """Whole-collection JSON round-trip keyed by a fixed namespace."""

    def __init__(self, path: Path | None = None) -> None:
        self.path = Path(path) if path else default_store_path()

    def _read(self) -> Dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            document = json.loads(self.path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise StoreError(f"Store file {self.path} is not valid JSON") from exc
        if not isinstance(document, dict):
            raise StoreError(f"Store file {self.path} does not hold a JSON object")
        return document

    def _write_key(self, key: str, items: List[Dict[str, Any]]) -> None:
        document = self._read()
        document[key] = items
        self.path.parent.mkdir(parents=True, exist_ok=True)
        staging = self.path.with_name(self.path.name + ".tmp")
        staging.write_text(json.dumps(document, ensure_ascii=False, indent=2), encoding="utf-8")
        os.replace(staging, self.path)

    def load_templates(self) -> List[Template]:
        return [Template.from_dict(item) for item in self._read().get(TEMPLATES_KEY, [])]

    def save_templates(self, templates: Iterable[Template]) -> None:
        items = [template.to_dict() for template in templates]
        self._write_key(TEMPLATES_KEY, items)
        logger.info("Saved %d templates to %s", len(items), self.path)

    def load_submissions(self) -> List[Submission]:
        return [Submission.from_dict(item) for item in self._read().get(SUBMISSIONS_KEY, [])]

    def save_submissions(self, submissions: Iterable[Submission]) -> None:
        items = [submission.to_dict() for submission in submissions]
        self._write_key(SUBMISSIONS_KEY, items)
        logger.info("Saved %d submissions to %s", len(items), self.path)

    def append_submission(self, submission: Submission) -> List[Submission]:
        """Add one submission to the end of the history and persist it."""

        history = [*self.load_submissions(), submission]
        self.save_submissions(history)
        return history
