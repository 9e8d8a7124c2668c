"""JSON and JSON Lines adapters."""

from __future__ import annotations

import json
from typing import Any

from ..errors import DocumentLoadError
from ..tree import Struct


class JSONAdapter:
    """Load a single JSON document; objects keep duplicate keys."""

    format = "json"
    suffixes = (".json",)

    def load(self, text: str) -> list[Any]:
        try:
            return [json.loads(text, object_pairs_hook=Struct)]
        except json.JSONDecodeError as exc:
            raise DocumentLoadError(self.format, f"invalid JSON ({exc})") from exc


class JSONLinesAdapter:
    """Load one JSON document per non-blank line."""

    format = "jsonl"
    suffixes = (".jsonl", ".ndjson")

    def load(self, text: str) -> list[Any]:
        documents: list[Any] = []
        for idx, line in enumerate(text.splitlines(), start=1):
            raw = line.strip()
            if not raw:
                continue
            try:
                documents.append(json.loads(raw, object_pairs_hook=Struct))
            except json.JSONDecodeError as exc:
                raise DocumentLoadError(self.format, f"line {idx}: invalid JSON ({exc})") from exc
        return documents
