"""The library of program files: naming, paging, categories, import and export."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Iterable

FILES_PER_PAGE = 10
TIME_FORMAT = "%Y-%m-%d %H-%M-%S"
PLAIN_SUFFIX = ".json"
ENCRYPTED_SUFFIX = ".ejson"
EXPORT_MASK = b"my-secret-key"

_ILLEGAL_CHARS = re.compile(r'[\\/:*?"<>|]')


class LibraryError(Exception):
    """A library action that cannot be carried out."""


@dataclass
class ProgramInfo:
    """What the program dialog asks for."""

    category: str = ""
    name: str = ""
    description: str = ""


@dataclass
class ProgramFile:
    """A program file and the attributes encoded in its name."""

    file_name: str
    category: str = ""
    name: str = ""
    time: str = ""
    description: str = ""


def parse_file_name(file_name: str) -> ProgramFile:
    """Split ``category_name_time_description.json`` into its attributes.

    Names with fewer than four parts leave the attributes empty.
    """
    base = file_name[:-5]
    parts = base.split("_")
    if len(parts) >= 4:
        return ProgramFile(file_name, parts[0], parts[1], parts[2], parts[3])
    return ProgramFile(file_name)


def create_file_name(
    category: str, name: str, description: str, now: datetime | None = None
) -> str:
    """The file name of a new program, stamped with the given or current time."""
    stamp = (now or datetime.now()).strftime(TIME_FORMAT)
    return f"{category}_{name}_{stamp}_{description}{PLAIN_SUFFIX}"


def xor_cipher(data: bytes, key: bytes) -> bytes:
    """XOR each byte with the repeating key; applying it twice restores the data."""
    if not key:
        raise ValueError("key must not be empty")
    size = len(key)
    return bytes(byte ^ key[i % size] for i, byte in enumerate(data))


def _default_programs_dir() -> Path:
    return Path.home() / "Documents" / "ConfigUI" / "programFiles"


def _default_categories_path() -> Path:
    return Path.home() / ".config" / "ConfigUI" / "StartWindow.json"


def _sort_key(file_name: str) -> str:
    parts = file_name.split("_")
    return parts[2] if len(parts) > 2 else ""


class CategoryStore:
    """The user's list of program categories, kept in a JSON file."""

    def __init__(self, path: str | Path | None = None):
        self.path = Path(path) if path is not None else _default_categories_path()
        self.categories: list[str] = self._load()

    def _load(self) -> list[str]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError):
            return []
        values = data.get("categories") if isinstance(data, dict) else None
        if not isinstance(values, list):
            return []
        return [value for value in values if isinstance(value, str)]

    def _save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(
            json.dumps({"categories": self.categories}, ensure_ascii=False),
            encoding="utf-8",
        )

    def add(self, name: str) -> bool:
        """Add a category; an empty or existing name is ignored."""
        if not name or name in self.categories:
            return False
        self.categories.append(name)
        self._save()
        return True

    def remove(self, name: str) -> None:
        """Remove every occurrence of a category."""
        if not self.categories:
            raise LibraryError("没有可删除的类别！")
        if not name:
            raise LibraryError("请选择要删除的类别！")
        self.categories = [c for c in self.categories if c != name]
        self._save()


@dataclass
class ProgramLibrary:
    """The program files of a directory, ordered by their creation time.

    Files are addressed by their index in that order, starting at 0.
    """

    directory: Path = field(default_factory=_default_programs_dir)
    mask: bytes = EXPORT_MASK

    def __post_init__(self) -> None:
        self.directory = Path(self.directory)
        self._names: list[str] = []
        self.refresh()

    @property
    def file_names(self) -> list[str]:
        return list(self._names)

    @property
    def files(self) -> list[ProgramFile]:
        return [parse_file_name(name) for name in self._names]

    def refresh(self) -> None:
        """Re-read the directory, creating it when missing."""
        self.directory.mkdir(parents=True, exist_ok=True)
        names = sorted(
            (
                entry.name
                for entry in self.directory.iterdir()
                if entry.is_file() and entry.name.lower().endswith(PLAIN_SUFFIX)
            ),
            key=str.lower,
        )
        self._names = sorted(names, key=_sort_key)

    def page_count(self) -> int:
        return (len(self._names) + FILES_PER_PAGE - 1) // FILES_PER_PAGE

    def page(self, number: int) -> list[ProgramFile]:
        """The files shown on a page, numbered from 1."""
        if number < 1:
            raise ValueError(f"page numbers start at 1, got {number}")
        start = (number - 1) * FILES_PER_PAGE
        return [parse_file_name(n) for n in self._names[start:start + FILES_PER_PAGE]]

    def path_of(self, index: int) -> Path:
        if not 0 <= index < len(self._names):
            raise IndexError(f"no program at index {index}")
        return self.directory / self._names[index]

    def _valid(self, indices: Iterable[int]) -> list[int]:
        return sorted(i for i in set(indices) if 0 <= i < len(self._names))

    def add_program(self, info: ProgramInfo) -> str:
        """Create an empty program file and return its name."""
        if not info.category or not info.name:
            raise LibraryError("类别和名称不能为空！")
        file_name = create_file_name(info.category, info.name, info.description)
        if _ILLEGAL_CHARS.search(file_name):
            raise LibraryError(
                '程序类别、名称或描述中含有非法字符 (\\ / : * ? " < > |)，'
                "请修改程序类别、名称或描述。"
            )
        try:
            (self.directory / file_name).write_bytes(b"")
        except OSError as exc:
            raise LibraryError("无法创建文件。") from exc
        self.refresh()
        return file_name

    def delete_programs(self, indices: Iterable[int]) -> tuple[int, int]:
        """Delete files; returns the counts of successes and failures."""
        indices = list(indices)
        if not indices:
            raise LibraryError("请选择要删除的程序！")
        succeeded = failed = 0
        for index in self._valid(indices):
            try:
                (self.directory / self._names[index]).unlink()
                succeeded += 1
            except OSError:
                failed += 1
        self.refresh()
        return succeeded, failed

    def rename_program(self, index: int, info: ProgramInfo) -> str:
        """Rename a file after new attributes, keeping its time; returns the new name."""
        old_path = self.path_of(index)
        if not info.category or not info.name:
            raise LibraryError("类别和名称不能为空！")
        time = parse_file_name(self._names[index]).time
        new_name = f"{info.category}_{info.name}_{time}_{info.description}{PLAIN_SUFFIX}"
        new_path = self.directory / new_name
        if new_path.exists():
            raise LibraryError(f"file already exists: {new_name}")
        try:
            old_path.rename(new_path)
        except OSError as exc:
            raise LibraryError(f"cannot rename {old_path.name}") from exc
        self._names[index] = new_name
        return new_name

    def export_programs(
        self, indices: Iterable[int], dest_dir: str | Path, encrypt: bool
    ) -> tuple[int, int]:
        """Copy files to a directory, masked and renamed to .ejson when encrypting."""
        indices = list(indices)
        if not indices:
            raise LibraryError("请选择要导出的程序！")
        dest_dir = Path(dest_dir)
        succeeded = failed = 0
        for index in self._valid(indices):
            source_name = self._names[index]
            dest_name = source_name
            if encrypt and dest_name.endswith(PLAIN_SUFFIX):
                dest_name = dest_name.replace(PLAIN_SUFFIX, ENCRYPTED_SUFFIX)
            try:
                data = (self.directory / source_name).read_bytes()
                if encrypt:
                    data = xor_cipher(data, self.mask)
                (dest_dir / dest_name).write_bytes(data)
                succeeded += 1
            except OSError:
                failed += 1
        return succeeded, failed

    def import_files(self, paths: Iterable[str | Path]) -> tuple[int, int]:
        """Copy files into the library, unmasking .ejson files back to .json."""
        succeeded = failed = 0
        for source in map(Path, paths):
            dest_name = source.name
            try:
                data = source.read_bytes()
            except OSError:
                failed += 1
                continue
            if dest_name.endswith(ENCRYPTED_SUFFIX):
                data = xor_cipher(data, self.mask)
                dest_name = dest_name.replace(ENCRYPTED_SUFFIX, PLAIN_SUFFIX)
            try:
                (self.directory / dest_name).write_bytes(data)
                succeeded += 1
            except OSError:
                failed += 1
        if succeeded:
            self.refresh()
        return succeeded, failed