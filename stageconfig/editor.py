"""Editing the stages and steps of one program file."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from .forms import Form, FormType
from .model import ProcessStage, ProcessStep, load_stages, save_stages


class EditorError(Exception):
    """An editing action that cannot be carried out in the current state."""


@dataclass
class StageInfo:
    """What the stage dialog asks for: a name and a stage type."""

    stage_name: str = ""
    stage_type: str = ""

    @property
    def label(self) -> str:
        """The name a stage is shown and stored under."""
        return f"{self.stage_name}_{self.stage_type}"

    def to_json(self) -> dict:
        return {"stageName": self.stage_name, "stageType": self.stage_type}


@dataclass(frozen=True)
class _Editing:
    stage_id: uuid.UUID
    step_id: uuid.UUID


class Editor:
    """Stages of a program file, the selected item and the parameter forms.

    The selection is a stage index with an optional step index, as in a tree
    of stages whose children are steps.
    """

    def __init__(self, file_path: str | Path, form_index: int = FormType.DEFAULT):
        self.file_path = Path(file_path)
        self.stages: list[ProcessStage] = []
        self.forms: dict[FormType, Form] = {t: Form(t) for t in FormType}
        self._form_index = FormType(form_index)
        self._selection: tuple[int, int | None] | None = None
        self._editing: _Editing | None = None
        self.load()

    @property
    def form_index(self) -> FormType:
        return self._form_index

    @property
    def form(self) -> Form:
        """The form page currently shown."""
        return self.forms[self._form_index]

    @property
    def selection(self) -> tuple[int, int | None] | None:
        return self._selection

    @property
    def editing_step(self) -> ProcessStep | None:
        """The step whose data is being edited, if any."""
        if self._editing is None:
            return None
        for stage in self.stages:
            if stage.id == self._editing.stage_id:
                return next(
                    (s for s in stage.steps if s.id == self._editing.step_id), None
                )
        return None

    def _form_at(self, form_index: int) -> Form:
        try:
            return self.forms[FormType(form_index)]
        except ValueError:
            raise EditorError(f"no form with index {form_index}") from None

    def _stage(self, stage_index: int) -> ProcessStage:
        if not 0 <= stage_index < len(self.stages):
            raise IndexError(f"no stage at index {stage_index}")
        return self.stages[stage_index]

    def _step(self, stage_index: int, step_index: int) -> ProcessStep:
        stage = self._stage(stage_index)
        if not 0 <= step_index < len(stage.steps):
            raise IndexError(f"no step at index {step_index}")
        return stage.steps[step_index]

    def select(self, stage_index: int | None, step_index: int | None = None) -> None:
        """Make a stage, or a step within it, the current item; None clears it."""
        if stage_index is None:
            self._selection = None
            return
        if step_index is None:
            self._stage(stage_index)
        else:
            self._step(stage_index, step_index)
        self._selection = (stage_index, step_index)

    def add_stage(self, info: StageInfo) -> ProcessStage:
        stage = ProcessStage(stage_name=info.label)
        self.stages.append(stage)
        return stage

    def rename_stage(self, stage_index: int, info: StageInfo) -> None:
        self._stage(stage_index).stage_name = info.label

    def delete_selected(self) -> None:
        """Remove the selected stage or step."""
        if self._selection is None:
            raise EditorError("请选择要删除的阶段或步骤！")
        stage_index, step_index = self._selection
        stage = self._stage(stage_index)
        if step_index is None:
            del self.stages[stage_index]
            affects_editing = (
                self._editing is not None and self._editing.stage_id == stage.id
            )
        else:
            step = stage.steps.pop(step_index)
            affects_editing = (
                self._editing is not None and self._editing.step_id == step.id
            )
        if affects_editing:
            self._editing = None
            self.form.clear()
        self._selection = None

    def begin_edit_step(self, stage_index: int, step_index: int) -> ProcessStep:
        """Show a step's form filled with its data and mark it as being edited."""
        stage = self._stage(stage_index)
        step = self._step(stage_index, step_index)
        form = self._form_at(step.form_index)
        form.load(step.form_data)
        self.change_form(step.form_index)
        self._editing = _Editing(stage.id, step.id)
        return step

    def change_form(self, form_index: int) -> None:
        """Switch the form page, clearing the page left and any pending edit."""
        new_index = FormType(self._form_at(form_index).form_type)
        if new_index == self._form_index:
            return
        self.forms[self._form_index].clear()
        self._form_index = new_index
        self._editing = None

    def submit(self, form_data: Mapping[str, Any] | None = None) -> ProcessStep:
        """Store the form as a new step, or as the update of the edited step.

        A new step goes after the selected step, or at the end of the
        selected stage. Without ``form_data`` the current form is used.
        """
        if self._selection is None:
            raise EditorError("请先选择一个阶段或步骤！")
        stage_index, step_index = self._selection
        stage = self._stage(stage_index)
        data = dict(form_data) if form_data is not None else self.form.save()
        raw_name = data.get("stepName")
        step_name = raw_name if isinstance(raw_name, str) else ""
        form_index = int(self._form_index)

        step: ProcessStep | None = None
        if self._editing is not None and self._editing.stage_id == stage.id:
            step = next(
                (s for s in stage.steps if s.id == self._editing.step_id), None
            )
        if step is not None:
            step.form_data = data
            step.step_name = step_name
            step.form_index = form_index
            self._editing = None
        else:
            step = ProcessStep(form_index=form_index, step_name=step_name, form_data=data)
            if step_index is None:
                stage.steps.append(step)
            else:
                stage.steps.insert(step_index + 1, step)
        self.form.clear()
        return step

    def reset(self) -> None:
        """Drop any pending edit and empty the current form."""
        self._editing = None
        self.form.clear()

    def _move(self, offset: int) -> None:
        if self._selection is None:
            raise EditorError("请选择一个要移动的项。")
        stage_index, step_index = self._selection
        if step_index is None:
            items: list = self.stages
            index = stage_index
        else:
            items = self._stage(stage_index).steps
            index = step_index
        target = index + offset
        if not 0 <= target < len(items):
            return
        items.insert(target, items.pop(index))
        if step_index is None:
            self._selection = (target, None)
        else:
            self._selection = (stage_index, target)

    def move_up(self) -> None:
        self._move(-1)

    def move_down(self) -> None:
        self._move(1)

    def save(self) -> None:
        save_stages(self.stages, self.file_path)

    def load(self) -> None:
        """Replace the stages with those in the file, when it has any."""
        stages = load_stages(self.file_path)
        if stages is None:
            return
        self.stages = stages
        self._selection = None
        self._editing = None