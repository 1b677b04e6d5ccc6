"""Program categories, parameter forms and the values held in them."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any, Iterable, Mapping

from .multiselect import MultiSelect

DEFAULT_CATEGORY = "请选择程序类别"
DEFAULT_SUBCATEGORY = "请选择子类别"
CONTINUOUS_YES = "是"
CONTINUOUS_NO = "否"


class FormType(IntEnum):
    """Index of each parameter form page."""

    DEFAULT = 0
    OPERATOR_INFO = 1
    INFO_PROMPT = 2
    PIPELINE_INFO = 3
    MAGNET_ACTION = 4
    BY_VOLUME = 5
    BY_BUBBLE_SENSOR = 6
    BY_PRESSURE = 7
    CENTRIFUGAL_SINGLE = 8
    CENTRIFUGAL_CYCLE = 9
    CENTRIFUGAL_STOP = 10
    PARAM_CYCLE = 11
    NUM_CYCLE = 12


class FieldKind(Enum):
    """The kind of input a form field is edited with."""

    LINE_EDIT = "line_edit"
    TEXT_EDIT = "text_edit"
    COMBO = "combo"
    MULTI_SELECT = "multi_select"
    SPIN = "spin"


PROGRAM_CATEGORIES: dict[str, tuple[str, ...]] = {
    DEFAULT_CATEGORY: (DEFAULT_SUBCATEGORY,),
    "信息输入": ("操作者信息", "管路信息"),
    "信息提示": ("信息提示",),
    "磁铁动作": ("磁铁动作",),
    "液体转移": ("按体积", "按气泡感受器", "按压力"),
    "离心运转": ("单次运转", "循环运转", "停止运转"),
    "循环步骤": ("参数循环", "次数循环"),
}

SUBCATEGORY_FORMS: dict[str, FormType] = {
    DEFAULT_SUBCATEGORY: FormType.DEFAULT,
    "操作者信息": FormType.OPERATOR_INFO,
    "管路信息": FormType.PIPELINE_INFO,
    "信息提示": FormType.INFO_PROMPT,
    "磁铁动作": FormType.MAGNET_ACTION,
    "按体积": FormType.BY_VOLUME,
    "按气泡感受器": FormType.BY_BUBBLE_SENSOR,
    "按压力": FormType.BY_PRESSURE,
    "单次运转": FormType.CENTRIFUGAL_SINGLE,
    "循环运转": FormType.CENTRIFUGAL_CYCLE,
    "停止运转": FormType.CENTRIFUGAL_STOP,
    "参数循环": FormType.PARAM_CYCLE,
    "次数循环": FormType.NUM_CYCLE,
}

_FORM_FIELDS: dict[FormType, dict[str, str]] = {
    FormType.OPERATOR_INFO: {
        "stepName": "operatorInfoStepNameLineEdit",
        "operatorName": "operatorInfoOperatorNameLineEdit",
        "description": "operatorInfoDescriptionTextEdit",
        "stage": "operatorInfoStageComboBox",
    },
    FormType.PIPELINE_INFO: {
        "stepName": "pipelineInfoStepNameLineEdit",
        "description": "pipelineInfoDescriptionTextEdit",
        "stage": "pipelineInfoStageComboBox",
    },
    FormType.INFO_PROMPT: {
        "stepName": "infoPromptStepNameLineEdit",
        "message": "infoPromptMessageLineEdit",
    },
    FormType.MAGNET_ACTION: {
        "stepName": "magnetActionStepNameLineEdit",
        "magnetAction": "magnetActionComboBox",
        "description": "magnetActionDescriptionTextEdit",
        "stage": "magnetActionStageComboBox",
        "automation": "magnetActionAutomationComboBox",
    },
    FormType.BY_VOLUME: {
        "stepName": "byVolumeStepNameLineEdit",
        "volume": "byVolumeSpinBox",
        "description": "byVolumeDescriptionTextEdit",
        "stage": "byVolumeStageComboBox",
        "automation": "byVolumeAutomationComboBox",
        "solenoidValve": "byVolumeSolenoidValveComboBox",
        "directionSetting": "byVolumeDirectionSettingComboBox",
        "rotationalSpeed": "byVolumeRotationalSpeedSpinBox",
    },
    FormType.BY_BUBBLE_SENSOR: {
        "stepName": "byBubbleSensorStepNameLineEdit",
        "bubbleSensor": "byBubbleSensorComboBox",
        "description": "byBubbleSensorDescriptionTextEdit",
        "stage": "byBubbleSensorStageComboBox",
        "automation": "byBubbleSensorAutomationComboBox",
        "solenoidValve": "byBubbleSensorSolenoidValveComboBox",
        "directionSetting": "byBubbleSensorDirectionSettingComboBox",
        "rotationalSpeed": "byBubbleSensorRotationalSpeedSpinBox",
    },
    FormType.BY_PRESSURE: {
        "stepName": "byPressureStepNameLineEdit",
        "description": "byPressureDescriptionTextEdit",
        "stage": "byPressureStageComboBox",
        "automation": "byPressureAutomationComboBox",
        "solenoidValve": "byPressureSolenoidValveComboBox",
        "directionSetting": "byPressureDirectionSettingComboBox",
        "rotationalSpeed": "byPressureRotationalSpeedSpinBox",
        "pressure": "byPressureNumberLineEdit",
    },
    FormType.CENTRIFUGAL_SINGLE: {
        "stepName": "centrifugalSingleStepNameLineEdit",
        "centrifugalSpeed": "centrifugalSingleCentrifugalSpeedSpinBox",
        "description": "centrifugalSingleDescriptionTextEdit",
        "stage": "centrifugalSingleStageComboBox",
        "automation": "centrifugalSingleAutomationComboBox",
        "unit": "centrifugalSingleUnitComboBox",
        "directionSetting": "centrifugalSingleDirectionSettingComboBox",
        "accelerationTime": "centrifugalSingleAccelerationTimeSpinBox",
        "continuousRunning": "centrifugalSingleContinuousRunningComboBox",
        "runningTime": "centrifugalSingleRunningTimeSpinBox",
    },
    FormType.CENTRIFUGAL_CYCLE: {
        "stepName": "centrifugalCycleStepNameLineEdit",
        "centrifugalSpeed": "centrifugalCycleCentrifugalSpeedSpinBox",
        "description": "centrifugalCycleDescriptionTextEdit",
        "stage": "centrifugalCycleStageComboBox",
        "automation": "centrifugalCycleAutomationComboBox",
        "unit": "centrifugalCycleUnitComboBox",
        "accelerationTime": "centrifugalCycleAccelerationTimeSpinBox",
        "directionSetting": "centrifugalCycleDirectionSettingComboBox",
        "singleTime": "centrifugalCycleSingleTimeSpinBox",
        "internalTime": "centrifugalCycleInternalTimeSpinBox",
        "totalTime": "centrifugalCycleTotalTimeSpinBox",
    },
    FormType.CENTRIFUGAL_STOP: {
        "stepName": "centrifugalStopStepNameLineEdit",
        "description": "centrifugalStopDescriptionTextEdit",
        "stage": "centrifugalStopStageComboBox",
        "automation": "centrifugalStopAutomationComboBox",
        "stopRunning": "centrifugalStopRunningComboBox",
    },
    FormType.PARAM_CYCLE: {
        "stepName": "paramCycleStepNameLineEdit",
        "sampleParam": "paramCycleSampleParamComboBox",
        "startStep": "paramCycleStartStepLineEdit",
        "endStep": "paramCycleEndStepLineEdit",
        "description": "paramCycleDescriptionTextEdit",
        "automation": "paramCycleAutomationComboBox",
    },
    FormType.NUM_CYCLE: {
        "stepName": "numCycleStepNameLineEdit",
        "cycleNum": "numCycleNumberSpinBox",
        "startStep": "numCycleStartStepLineEdit",
        "endStep": "numCycleEndStepLineEdit",
        "description": "numCycleDescriptionTextEdit",
        "automation": "numCycleAutomationComboBox",
    },
}


def subcategories(category: str) -> list[str]:
    """Subcategories offered for a program category; empty when unknown."""
    return list(PROGRAM_CATEGORIES.get(category, ()))


def form_for_subcategory(subcategory: str) -> FormType:
    """The form page shown for a subcategory; the default page when unknown."""
    return SUBCATEGORY_FORMS.get(subcategory, FormType.DEFAULT)


def form_fields(form_type: int) -> dict[str, str]:
    """JSON key to widget name for a form, ordered by key."""
    fields = _FORM_FIELDS.get(FormType(form_type), {})
    return dict(sorted(fields.items()))


def field_kind(widget_name: str) -> FieldKind:
    """The kind of input a widget is, judged by its name."""
    if "StageComboBox" in widget_name or "SolenoidValveComboBox" in widget_name:
        return FieldKind.MULTI_SELECT
    for suffix, kind in (
        ("LineEdit", FieldKind.LINE_EDIT),
        ("TextEdit", FieldKind.TEXT_EDIT),
        ("ComboBox", FieldKind.COMBO),
        ("SpinBox", FieldKind.SPIN),
    ):
        if widget_name.endswith(suffix):
            return kind
    raise ValueError(f"unknown widget kind: {widget_name!r}")


def stage_options() -> list[str]:
    return ["Stage 1", "Stage 2", "Stage 3"]


def solenoid_valve_options() -> list[str]:
    valves = [f"{n}号电磁阀" for n in range(1, 25)]
    valves += [f"F{n:02d}电磁阀" for n in range(1, 16)]
    return valves


def _multi_options(widget_name: str) -> list[str]:
    if "SolenoidValveComboBox" in widget_name:
        return solenoid_valve_options()
    return stage_options()


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return 0


@dataclass
class _Field:
    widget: str
    kind: FieldKind
    choices: tuple[str, ...] = ()
    value: Any = None
    selector: MultiSelect | None = None
    enabled: bool = True

    def default_value(self) -> Any:
        if self.kind is FieldKind.SPIN:
            return 0
        if self.kind is FieldKind.COMBO:
            return self.choices[0] if self.choices else ""
        return ""


def _default_categories(form_type: FormType) -> tuple[str, str]:
    for category, subs in PROGRAM_CATEGORIES.items():
        for sub in subs:
            if SUBCATEGORY_FORMS[sub] is form_type:
                return category, sub
    return DEFAULT_CATEGORY, DEFAULT_SUBCATEGORY


@dataclass
class Form:
    """The fields of one parameter form and their current values.

    ``choices`` gives the entries of single-choice fields by JSON key; a
    field without known entries accepts any text.
    """

    form_type: FormType
    choices: Mapping[str, Iterable[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.form_type = FormType(self.form_type)
        self._fields: dict[str, _Field] = {}
        for key, widget in form_fields(self.form_type).items():
            kind = field_kind(widget)
            item = _Field(widget, kind, tuple(self.choices.get(key, ())))
            if kind is FieldKind.MULTI_SELECT:
                item.selector = MultiSelect()
                item.selector.add_items(_multi_options(widget))
                item.selector.set_search_bar_hidden(True)
            else:
                item.value = item.default_value()
            self._fields[key] = item
        self._program_category, self._sub_category = _default_categories(
            self.form_type
        )

    @property
    def keys(self) -> list[str]:
        return list(self._fields)

    @property
    def disabled_fields(self) -> frozenset[str]:
        return frozenset(k for k, f in self._fields.items() if not f.enabled)

    @property
    def program_category(self) -> str:
        return self._program_category

    @program_category.setter
    def program_category(self, category: str) -> None:
        if category not in PROGRAM_CATEGORIES:
            raise ValueError(f"unknown program category: {category!r}")
        if category != self._program_category:
            self._program_category = category
            self._sub_category = PROGRAM_CATEGORIES[category][0]

    @property
    def sub_category(self) -> str:
        return self._sub_category

    @sub_category.setter
    def sub_category(self, subcategory: str) -> None:
        if subcategory not in PROGRAM_CATEGORIES[self._program_category]:
            raise ValueError(f"unknown subcategory: {subcategory!r}")
        self._sub_category = subcategory

    def _field(self, key: str) -> _Field:
        try:
            return self._fields[key]
        except KeyError:
            raise KeyError(f"form has no field {key!r}") from None

    def set(self, key: str, value: Any) -> None:
        """Enter a value into a field as a user would."""
        item = self._field(key)
        if item.kind in (FieldKind.LINE_EDIT, FieldKind.TEXT_EDIT):
            item.value = str(value)
        elif item.kind is FieldKind.SPIN:
            item.value = int(value)
        elif item.kind is FieldKind.COMBO:
            text = str(value)
            if item.choices and text not in item.choices:
                raise ValueError(f"{text!r} is not a choice of {key!r}")
            self._set_combo(key, item, text)
        else:
            texts = [value] if isinstance(value, str) else list(value)
            selector = item.selector
            unknown = [t for t in texts if t not in selector.visible_items() + self._all_options(item)]
            if unknown:
                raise ValueError(f"{unknown!r} are not options of {key!r}")
            selector.text_clear()
            selector.set_current_text(texts)

    def get(self, key: str) -> Any:
        """The current value of a field; a list of texts for multi-select."""
        item = self._field(key)
        if item.kind is FieldKind.MULTI_SELECT:
            return item.selector.current_text()
        return item.value

    def save(self) -> dict:
        """The form's values as a JSON object, with its category names."""
        data: dict[str, Any] = {}
        for key, item in self._fields.items():
            if item.kind is FieldKind.MULTI_SELECT:
                data[key] = ",".join(item.selector.current_text())
            else:
                data[key] = item.value
        data["programCategory"] = self._program_category
        data["subCategory"] = self._sub_category
        return data

    def load(self, data: Mapping[str, Any]) -> None:
        """Fill the fields from a JSON object; values that do not fit are skipped."""
        for key, item in self._fields.items():
            if key not in data:
                continue
            raw = data[key]
            if item.kind in (FieldKind.LINE_EDIT, FieldKind.TEXT_EDIT):
                item.value = _to_str(raw)
            elif item.kind is FieldKind.SPIN:
                item.value = _to_int(raw)
            elif item.kind is FieldKind.COMBO:
                text = _to_str(raw)
                if not item.choices or text in item.choices:
                    self._set_combo(key, item, text)
            else:
                item.selector.set_current_text(_to_str(raw).split(","))
        category = _to_str(data.get("programCategory"))
        if category in PROGRAM_CATEGORIES:
            self.program_category = category
        subcategory = _to_str(data.get("subCategory"))
        if subcategory in PROGRAM_CATEGORIES[self._program_category]:
            self._sub_category = subcategory

    def clear(self) -> None:
        """Return every field to its empty or first value."""
        for key, item in self._fields.items():
            if item.kind is FieldKind.MULTI_SELECT:
                item.selector.text_clear()
            elif item.kind is FieldKind.COMBO:
                self._set_combo(key, item, item.default_value())
            else:
                item.value = item.default_value()

    @staticmethod
    def _all_options(item: _Field) -> list[str]:
        return _multi_options(item.widget)

    def _set_combo(self, key: str, item: _Field, text: str) -> None:
        if text == item.value:
            return
        item.value = text
        if self.form_type is FormType.CENTRIFUGAL_SINGLE and key == "continuousRunning":
            running = self._fields["runningTime"]
            if text == CONTINUOUS_YES:
                running.enabled = False
                running.value = 0
            elif text == CONTINUOUS_NO:
                running.enabled = True