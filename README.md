# stageconfig

`stageconfig` helps you write process programs. A program is a list of
ordered **stages**, and each stage holds ordered **steps**. Each step is a
filled-in parameter form. The forms cover operator info, pipeline info, info
prompts, magnet actions, liquid transfer (by volume, by bubble sensor or by
pressure), single, cyclic or stopped centrifugal runs, and parameter or count
loops.

Programs are plain JSON files. They are kept in a program library: a directory
of files that can be listed page by page, created, renamed, deleted, exported
and imported.

## Installation

```
pip install .
```

The package needs Python 3.10 or later. It uses only the standard library.

## Command line

The `stageconfig` command runs one subcommand at a time:

```
stageconfig [--dir DIR] [--categories-file FILE] COMMAND ...
```

- `--dir DIR` sets the program files directory. The default is
  `~/Documents/ConfigUI/programFiles`. The directory is created if it is
  missing.
- `--categories-file FILE` sets the file that holds the category list. The
  default is `~/.config/ConfigUI/StartWindow.json`.

Programs are addressed by number. Numbers start at 1 and follow the library's
order across all pages, as printed by `list`.

| Command | What it does |
| --- | --- |
| `stageconfig list [--page N]` | Prints the programs of page N (default 1). Each line holds the number, category, name, time and description, separated by tabs. |
| `stageconfig pages` | Prints the number of pages. |
| `stageconfig add CATEGORY NAME [DESCRIPTION]` | Creates an empty program file stamped with the current time, and prints its name. |
| `stageconfig delete N [N ...]` | Deletes programs and reports how many succeeded and failed. |
| `stageconfig rename N CATEGORY NAME [DESCRIPTION]` | Renames a program after new attributes. Its time is kept. Prints the new name. |
| `stageconfig export N [N ...] --to DIR [--encrypt]` | Copies programs to DIR. With `--encrypt` each copy is scrambled and gets the `.ejson` suffix. |
| `stageconfig import PATH [PATH ...]` | Copies files into the library. `.ejson` files are unscrambled and stored as `.json`. |
| `stageconfig show N` | Prints the stage names of a program, each followed by its step names. |
| `stageconfig category list` | Prints the categories. |
| `stageconfig category add NAME` | Adds a category. Empty and existing names are ignored. |
| `stageconfig category remove NAME` | Removes every occurrence of a category. |

If a command fails, the command prints the reason after `错误: ` on standard
error and exits with status 1. A missing category or name and an unknown
program number are examples of such failures. Messages from the library are in
Chinese.

## Program files

Every program in the library is one JSON file. Its name has this form:

```
<category>_<name>_<yyyy-MM-dd HH-mm-ss>_<description>.json
```

Only files ending in `.json` are listed. The suffix is matched without regard
to case. Files are ordered by the time part of their names, and ten files are
shown per page. `add` refuses a category, name or description that contains
any of `\ / : * ? " < > |`. `add` and `rename` both require a category and a
name.

Inside, a program file holds a JSON array of stages. Each stage has an `id`, a
`stageName` and a list of `steps`. Each step has an `id`, a `formIndex`, a
`stepName` and the `formData` that was submitted for it. Ids are written as
braced UUIDs.

Scrambling XORs each byte with a repeating fixed mask, so scrambling twice
gives the original back. It hides a file's contents from a casual look. It is
not encryption in any secure sense.

## Using it from Python

- `stageconfig.model`: `ProcessStage` and `ProcessStep`, with `from_json` and
  `to_json`. `load_stages(path)` returns the stages of a file. It returns
  `None` when the file is missing, is not valid JSON, or is empty.
  `save_stages(stages, path)` writes an indented JSON array.
- `stageconfig.forms`: `FormType` numbers the parameter forms.
  `subcategories`, `form_for_subcategory` and `form_fields` describe the
  categories and the fields of each form. `Form` holds field values with
  `set`, `get`, `save`, `load` and `clear`. In the single centrifugal run
  form, choosing `是` for `continuousRunning` disables `runningTime` and sets
  it to 0.
- `stageconfig.editor`: `Editor(path)` loads a program file. You make a stage
  or step current with `select`. Stages are added with `add_stage(StageInfo(...))`
  and renamed with `rename_stage`. `delete_selected` removes the current item,
  and `move_up` and `move_down` reorder it. `begin_edit_step` loads a step
  into its form. `submit` adds a new step after the selection, or updates the
  step being edited. `save` writes the file. Actions that cannot be done in
  the current state raise `EditorError`.
- `stageconfig.library`: `ProgramLibrary` and `CategoryStore` do the work
  behind the command line. `parse_file_name` and `create_file_name` handle the
  naming scheme, and `xor_cipher(data, key)` scrambles data. Failures raise
  `LibraryError`.
- `stageconfig.multiselect`: `MultiSelect` is a multi-choice selection with a
  case-insensitive search filter. It is used for the stage and solenoid valve
  fields.

```python
from stageconfig.editor import Editor, StageInfo

editor = Editor("program.json")
editor.add_stage(StageInfo("Lysis", "A"))
editor.select(len(editor.stages) - 1)
editor.submit({"stepName": "Mix"})
editor.save()
```

## What it does not do

There is no graphical interface. Stages, steps and forms can be edited only
from Python, through `Editor` and `Form`. The command line can create, list,
rename, move between directories, and show programs, but it cannot edit their
stages or steps.

## Running the tests

```
pip install .[test]
pytest
```