"""Command line front end for the program library and its files."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .editor import Editor
from .library import CategoryStore, LibraryError, ProgramFile, ProgramInfo, ProgramLibrary


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="stageconfig",
        description="Manage process program files and their categories.",
    )
    parser.add_argument("--dir", type=Path, default=None, help="program files directory")
    parser.add_argument(
        "--categories-file", type=Path, default=None, help="file holding the categories"
    )
    commands = parser.add_subparsers(dest="command", required=True)

    listing = commands.add_parser("list", help="list the programs of a page")
    listing.add_argument("--page", type=int, default=1)

    commands.add_parser("pages", help="print the number of pages")

    add = commands.add_parser("add", help="create an empty program file")
    add.add_argument("category")
    add.add_argument("name")
    add.add_argument("description", nargs="?", default="")

    delete = commands.add_parser("delete", help="delete programs by number")
    delete.add_argument("numbers", type=int, nargs="+")

    rename = commands.add_parser("rename", help="change a program's attributes")
    rename.add_argument("number", type=int)
    rename.add_argument("category")
    rename.add_argument("name")
    rename.add_argument("description", nargs="?", default="")

    export = commands.add_parser("export", help="copy programs to a directory")
    export.add_argument("numbers", type=int, nargs="+")
    export.add_argument("--to", dest="dest", type=Path, required=True)
    export.add_argument("--encrypt", action="store_true")

    imp = commands.add_parser("import", help="copy files into the library")
    imp.add_argument("paths", type=Path, nargs="+")

    show = commands.add_parser("show", help="print the stages and steps of a program")
    show.add_argument("number", type=int)

    category = commands.add_parser("category", help="manage program categories")
    category_commands = category.add_subparsers(dest="action", required=True)
    category_commands.add_parser("list")
    cat_add = category_commands.add_parser("add")
    cat_add.add_argument("name")
    cat_remove = category_commands.add_parser("remove")
    cat_remove.add_argument("name")
    return parser


def _library(args: argparse.Namespace) -> ProgramLibrary:
    if args.dir is None:
        return ProgramLibrary()
    return ProgramLibrary(directory=args.dir)


def _indices(numbers: Sequence[int]) -> list[int]:
    """Row numbers as shown by ``list`` start at 1; indices start at 0."""
    return [number - 1 for number in numbers]


def _format_row(number: int, program: ProgramFile) -> str:
    return "\t".join(
        (str(number), program.category, program.name, program.time, program.description)
    )


def _report(kind: str, counts: tuple[int, int]) -> str:
    succeeded, failed = counts
    return f"成功{kind} {succeeded} 个文件。\n失败 {failed} 个。"


def _run_category(args: argparse.Namespace) -> None:
    store = CategoryStore(args.categories_file)
    if args.action == "list":
        for name in store.categories:
            print(name)
    elif args.action == "add":
        if store.add(args.name):
            print(args.name)
    else:
        store.remove(args.name)


def _run_show(library: ProgramLibrary, number: int) -> None:
    editor = Editor(library.path_of(number - 1))
    for stage in editor.stages:
        print(stage.stage_name)
        for step in stage.steps:
            print(f"  - {step.step_name}")


def _run(args: argparse.Namespace) -> None:
    if args.command == "category":
        _run_category(args)
        return
    library = _library(args)
    if args.command == "list":
        start = (args.page - 1) * 10
        for offset, program in enumerate(library.page(args.page)):
            print(_format_row(start + offset + 1, program))
    elif args.command == "pages":
        print(library.page_count())
    elif args.command == "add":
        print(library.add_program(ProgramInfo(args.category, args.name, args.description)))
    elif args.command == "delete":
        print(_report("删除", library.delete_programs(_indices(args.numbers))))
    elif args.command == "rename":
        info = ProgramInfo(args.category, args.name, args.description)
        print(library.rename_program(args.number - 1, info))
    elif args.command == "export":
        counts = library.export_programs(_indices(args.numbers), args.dest, args.encrypt)
        print(_report("导出", counts))
    elif args.command == "import":
        print(_report("导入", library.import_files(args.paths)))
    elif args.command == "show":
        _run_show(library, args.number)


def main(argv: Sequence[str] | None = None) -> int:
    """Run one command; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    try:
        _run(args)
    except (LibraryError, IndexError, ValueError) as exc:
        print(f"错误: {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())