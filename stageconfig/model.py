"""Stages and steps of a process program, with JSON persistence."""

from __future__ import annotations

import copy
import json
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Mapping

NIL_UUID = uuid.UUID(int=0)


def _parse_uuid(value: str) -> uuid.UUID:
    """Parse a UUID string; an unparsable one yields the nil UUID."""
    try:
        return uuid.UUID(value)
    except ValueError:
        return NIL_UUID


def _format_uuid(value: uuid.UUID) -> str:
    return "{" + str(value) + "}"


def _as_int(value: Any) -> int:
    """Integer value of a JSON number; anything else, or a fraction, is 0."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _as_object(value: Any) -> dict:
    return copy.deepcopy(dict(value)) if isinstance(value, Mapping) else {}


@dataclass
class ProcessStep:
    """One step of a stage: the form it was filled in with and its data."""

    form_index: int = 0
    step_name: str = ""
    form_data: dict = field(default_factory=dict)
    id: uuid.UUID = field(default_factory=uuid.uuid4)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ProcessStep:
        step = cls()
        raw_id = data.get("id")
        if isinstance(raw_id, str):
            step.id = _parse_uuid(raw_id)
        step.form_index = _as_int(data.get("formIndex"))
        step.step_name = _as_str(data.get("stepName"))
        step.form_data = _as_object(data.get("formData"))
        return step

    def to_json(self) -> dict:
        return {
            "id": _format_uuid(self.id),
            "formIndex": self.form_index,
            "stepName": self.step_name,
            "formData": copy.deepcopy(self.form_data),
        }


@dataclass
class ProcessStage:
    """A named stage holding an ordered list of steps."""

    stage_name: str = ""
    id: uuid.UUID = field(default_factory=uuid.uuid4)
    steps: list[ProcessStep] = field(default_factory=list)

    @classmethod
    def from_json(cls, data: Mapping[str, Any]) -> ProcessStage:
        stage = cls()
        raw_id = data.get("id")
        if isinstance(raw_id, str):
            stage.id = _parse_uuid(raw_id)
        stage.stage_name = _as_str(data.get("stageName"))
        raw_steps = data.get("steps")
        if isinstance(raw_steps, list):
            stage.steps = [
                ProcessStep.from_json(item if isinstance(item, Mapping) else {})
                for item in raw_steps
            ]
        return stage

    def to_json(self) -> dict:
        return {
            "id": _format_uuid(self.id),
            "stageName": self.stage_name,
            "steps": [step.to_json() for step in self.steps],
        }


def load_stages(path: str | Path) -> list[ProcessStage] | None:
    """Read stages from a JSON file.

    Returns None when there is nothing to load: the file is missing, is not
    valid JSON, or holds an empty or non-container document.
    """
    path = Path(path)
    if not path.exists():
        return None
    raw = path.read_bytes()
    try:
        document = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError):
        return None
    if not isinstance(document, (list, dict)) or not document:
        return None
    if not isinstance(document, list):
        return []
    return [
        ProcessStage.from_json(item if isinstance(item, Mapping) else {})
        for item in document
    ]


def save_stages(stages: list[ProcessStage], path: str | Path) -> None:
    """Write stages to a JSON file as an indented array."""
    text = json.dumps(
        [stage.to_json() for stage in stages],
        indent=4,
        ensure_ascii=False,
        sort_keys=True,
    )
    Path(path).write_text(text + "\n", encoding="utf-8")