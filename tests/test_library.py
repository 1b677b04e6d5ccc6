from datetime import datetime

import pytest

from stageconfig.library import (
    EXPORT_MASK,
    FILES_PER_PAGE,
    CategoryStore,
    LibraryError,
    ProgramFile,
    ProgramInfo,
    ProgramLibrary,
    create_file_name,
    parse_file_name,
    xor_cipher,
)


def _write(directory, name, content=b""):
    (directory / name).write_bytes(content)


@pytest.fixture
def library(tmp_path):
    return ProgramLibrary(tmp_path / "programs")


def test_parse_file_name_full():
    parsed = parse_file_name("cat_prog_2024-01-02 03-04-05_desc.json")
    assert parsed == ProgramFile(
        "cat_prog_2024-01-02 03-04-05_desc.json",
        "cat",
        "prog",
        "2024-01-02 03-04-05",
        "desc",
    )


def test_parse_file_name_too_few_parts():
    parsed = parse_file_name("a_b.json")
    assert (parsed.category, parsed.name, parsed.time, parsed.description) == ("", "", "", "")


def test_create_file_name_format():
    name = create_file_name("cat", "prog", "desc", datetime(2024, 1, 2, 3, 4, 5))
    assert name == "cat_prog_2024-01-02 03-04-05_desc.json"


def test_create_and_parse_round_trip():
    when = datetime(2023, 12, 31, 23, 59, 58)
    parsed = parse_file_name(create_file_name("c", "n", "d", when))
    assert (parsed.category, parsed.name, parsed.description) == ("c", "n", "d")
    assert datetime.strptime(parsed.time, "%Y-%m-%d %H-%M-%S") == when


def test_xor_cipher_round_trip_and_mask():
    data = b"hello world, some longer data here"
    masked = xor_cipher(data, EXPORT_MASK)
    assert masked != data
    assert xor_cipher(masked, EXPORT_MASK) == data
    assert xor_cipher(b"\x00\x00\x00", b"ab") == b"aba"


def test_xor_cipher_empty_key():
    with pytest.raises(ValueError):
        xor_cipher(b"abc", b"")


def test_category_store_add_and_persist(tmp_path):
    path = tmp_path / "settings.json"
    store = CategoryStore(path)
    assert store.categories == []
    assert store.add("alpha") is True
    assert store.add("alpha") is False
    assert store.add("") is False
    assert store.add("beta") is True
    assert CategoryStore(path).categories == ["alpha", "beta"]


def test_category_store_remove(tmp_path):
    path = tmp_path / "settings.json"
    store = CategoryStore(path)
    store.add("alpha")
    store.add("beta")
    store.remove("alpha")
    assert store.categories == ["beta"]
    assert CategoryStore(path).categories == ["beta"]
    with pytest.raises(LibraryError):
        store.remove("")


def test_category_store_remove_when_empty(tmp_path):
    store = CategoryStore(tmp_path / "settings.json")
    with pytest.raises(LibraryError):
        store.remove("alpha")


def test_refresh_creates_directory_and_sorts_by_time(tmp_path):
    directory = tmp_path / "programs"
    library = ProgramLibrary(directory)
    assert directory.is_dir()
    _write(directory, "a_x_2024-03-01 00-00-00_d.json")
    _write(directory, "b_y_2024-01-01 00-00-00_d.json")
    _write(directory, "c_z_2024-02-01 00-00-00_d.json")
    _write(directory, "ignored.txt")
    library.refresh()
    assert [f.name for f in library.files] == ["y", "z", "x"]


def test_paging(library):
    for n in range(23):
        _write(library.directory, f"c_p{n:02d}_2024-01-01 00-00-{n:02d}_d.json")
    library.refresh()
    assert library.page_count() == 3
    assert len(library.page(1)) == FILES_PER_PAGE
    assert library.page(1)[0].name == "p00"
    assert [f.name for f in library.page(3)] == ["p20", "p21", "p22"]
    assert library.page(4) == []
    with pytest.raises(ValueError):
        library.page(0)


def test_empty_library_has_no_pages(library):
    assert library.page_count() == 0


def test_add_program(library):
    name = library.add_program(ProgramInfo("cat", "prog", "desc"))
    assert library.file_names == [name]
    parsed = library.files[0]
    assert (parsed.category, parsed.name, parsed.description) == ("cat", "prog", "desc")
    assert library.path_of(0).read_bytes() == b""


def test_add_program_requires_category_and_name(library):
    with pytest.raises(LibraryError):
        library.add_program(ProgramInfo("", "prog", "desc"))
    with pytest.raises(LibraryError):
        library.add_program(ProgramInfo("cat", "", "desc"))
    assert library.file_names == []


def test_add_program_rejects_illegal_characters(library):
    with pytest.raises(LibraryError):
        library.add_program(ProgramInfo("cat", "a?b", "desc"))
    assert library.file_names == []


def test_path_of_out_of_range(library):
    with pytest.raises(IndexError):
        library.path_of(0)


def test_delete_programs(library):
    for n in range(3):
        _write(library.directory, f"c_p{n}_2024-01-01 00-00-0{n}_d.json")
    library.refresh()
    succeeded, failed = library.delete_programs([0, 2, 99])
    assert (succeeded, failed) == (2, 0)
    assert [f.name for f in library.files] == ["p1"]


def test_delete_programs_needs_selection(library):
    with pytest.raises(LibraryError):
        library.delete_programs([])


def test_rename_program_keeps_time(library):
    _write(library.directory, "c_old_2024-01-01 00-00-00_d.json", b"data")
    library.refresh()
    new_name = library.rename_program(0, ProgramInfo("k", "new", "e"))
    parsed = parse_file_name(new_name)
    assert (parsed.category, parsed.name, parsed.description) == ("k", "new", "e")
    assert parsed.time == "2024-01-01 00-00-00"
    assert library.file_names == [new_name]
    assert library.path_of(0).read_bytes() == b"data"
    assert not (library.directory / "c_old_2024-01-01 00-00-00_d.json").exists()


def test_rename_program_requires_name(library):
    _write(library.directory, "c_old_2024-01-01 00-00-00_d.json")
    library.refresh()
    with pytest.raises(LibraryError):
        library.rename_program(0, ProgramInfo("k", "", "e"))


def test_export_plain(library, tmp_path):
    name = "c_p_2024-01-01 00-00-00_d.json"
    _write(library.directory, name, b'[{"stageName": "s"}]')
    library.refresh()
    dest = tmp_path / "out"
    dest.mkdir()
    assert library.export_programs([0], dest, encrypt=False) == (1, 0)
    assert (dest / name).read_bytes() == b'[{"stageName": "s"}]'


def test_export_encrypted(library, tmp_path):
    content = b'[{"stageName": "s"}]'
    _write(library.directory, "c_p_2024-01-01 00-00-00_d.json", content)
    library.refresh()
    dest = tmp_path / "out"
    dest.mkdir()
    assert library.export_programs([0], dest, encrypt=True) == (1, 0)
    exported = dest / "c_p_2024-01-01 00-00-00_d.ejson"
    assert exported.read_bytes() == xor_cipher(content, EXPORT_MASK)


def test_export_to_missing_directory_counts_failure(library, tmp_path):
    _write(library.directory, "c_p_2024-01-01 00-00-00_d.json", b"x")
    library.refresh()
    assert library.export_programs([0], tmp_path / "missing", encrypt=False) == (0, 1)


def test_export_needs_selection(library, tmp_path):
    with pytest.raises(LibraryError):
        library.export_programs([], tmp_path, encrypt=False)


def test_export_import_round_trip(library, tmp_path):
    content = b'{"steps": []}'
    name = "c_p_2024-01-01 00-00-00_d.json"
    _write(library.directory, name, content)
    library.refresh()
    out = tmp_path / "out"
    out.mkdir()
    library.export_programs([0], out, encrypt=True)

    other = ProgramLibrary(tmp_path / "other")
    result = other.import_files([out / "c_p_2024-01-01 00-00-00_d.ejson"])
    assert result == (1, 0)
    assert other.file_names == [name]
    assert other.path_of(0).read_bytes() == content


def test_import_plain_and_missing(library, tmp_path):
    source = tmp_path / "x_y_2024-05-05 05-05-05_z.json"
    source.write_bytes(b"plain")
    result = library.import_files([source, tmp_path / "nope.json"])
    assert result == (1, 1)
    assert library.file_names == [source.name]
    assert library.path_of(0).read_bytes() == b"plain"