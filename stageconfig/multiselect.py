"""A multiple-choice selector with a search filter."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable

SEPARATOR = ";"
DEFAULT_SEARCH_PLACEHOLDER = "Search........."


@dataclass
class _Option:
    text: str
    checked: bool = False
    hidden: bool = False


class MultiSelect:
    """Holds checkable options and the ';'-joined text of the checked ones.

    Rows are numbered as in the drop-down list: row 0 is the search bar and
    the options follow from row 1.
    """

    def __init__(self, on_change: Callable[[str], None] | None = None):
        self._options: list[_Option] = []
        self._text = ""
        self._hidden_flag = True
        self.search_bar_hidden = False
        self.search_placeholder = DEFAULT_SEARCH_PLACEHOLDER
        self.placeholder = ""
        self.tooltip = ""
        self.on_change = on_change

    @property
    def text(self) -> str:
        """The displayed text of the current selection."""
        return self._text

    def add_item(self, text: str) -> None:
        self._options.append(_Option(text))

    def add_items(self, texts: Iterable[str]) -> None:
        for text in texts:
            self.add_item(text)

    def current_text(self) -> list[str]:
        """The selected texts, as split from the displayed text."""
        return self._text.split(SEPARATOR) if self._text else []

    def count(self) -> int:
        return len(self._options)

    def reset_selection(self) -> None:
        for option in self._options:
            self._set_checked(option, False)

    def clear(self) -> None:
        """Remove every option and restore the search bar."""
        self._text = ""
        self._options.clear()
        self.search_placeholder = DEFAULT_SEARCH_PLACEHOLDER
        self.search_bar_hidden = self._hidden_flag

    def text_clear(self) -> None:
        self._text = ""
        self.reset_selection()

    def set_current_text(self, texts: str | Iterable[str]) -> None:
        """Check every option whose text is among the given ones."""
        wanted = {texts} if isinstance(texts, str) else set(texts)
        for option in self._options:
            if option.text in wanted:
                self._set_checked(option, True)

    def set_search_bar_hidden(self, flag: bool) -> None:
        self._hidden_flag = bool(flag)
        self.search_bar_hidden = self._hidden_flag

    def search(self, text: str) -> None:
        """Show options containing the text, ignoring case; hide the rest."""
        needle = text.casefold()
        for option in self._options:
            option.hidden = needle not in option.text.casefold()

    def visible_items(self) -> list[str]:
        return [option.text for option in self._options if not option.hidden]

    def toggle(self, index: int) -> None:
        """Flip the check state of the option at a list row; row 0 is ignored."""
        if index == 0:
            return
        if not 1 <= index <= len(self._options):
            raise IndexError(f"no option at row {index}")
        option = self._options[index - 1]
        self._set_checked(option, not option.checked)

    def _set_checked(self, option: _Option, checked: bool) -> None:
        if option.checked == checked:
            return
        option.checked = checked
        self._state_changed()

    def _state_changed(self) -> None:
        selected = SEPARATOR.join(o.text for o in self._options if o.checked)
        self._text = selected
        self.tooltip = selected
        if self.on_change is not None:
            self.on_change(selected)