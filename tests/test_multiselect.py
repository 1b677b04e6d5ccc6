import pytest

from stageconfig.multiselect import MultiSelect


def _combo(*texts):
    combo = MultiSelect()
    combo.add_items(texts)
    return combo


def test_count_matches_items_added():
    combo = _combo("Stage 1", "Stage 2", "Stage 3")
    assert combo.count() == 3
    combo.add_item("Stage 4")
    assert combo.count() == 4


def test_nothing_selected_initially():
    combo = _combo("a", "b")
    assert combo.current_text() == []
    assert combo.text == ""


def test_toggle_selects_in_list_order():
    combo = _combo("Stage 1", "Stage 2", "Stage 3")
    combo.toggle(3)
    combo.toggle(1)
    assert combo.current_text() == ["Stage 1", "Stage 3"]
    assert combo.text == "Stage 1;Stage 3"
    assert combo.tooltip == combo.text


def test_toggle_twice_unselects():
    combo = _combo("a", "b")
    combo.toggle(2)
    combo.toggle(2)
    assert combo.current_text() == []


def test_toggle_row_zero_is_search_bar():
    combo = _combo("a", "b")
    combo.toggle(0)
    assert combo.current_text() == []


def test_toggle_out_of_range_raises():
    combo = _combo("a")
    with pytest.raises(IndexError):
        combo.toggle(2)
    with pytest.raises(IndexError):
        combo.toggle(-1)


def test_set_current_text_checks_listed_items():
    combo = _combo("x", "y", "z")
    combo.set_current_text(["z", "x", "missing"])
    assert combo.current_text() == ["x", "z"]


def test_set_current_text_adds_to_selection():
    combo = _combo("x", "y", "z")
    combo.set_current_text(["x"])
    combo.set_current_text(["y"])
    assert combo.current_text() == ["x", "y"]


def test_set_current_text_with_single_string():
    combo = _combo("x", "y")
    combo.set_current_text("y")
    assert combo.current_text() == ["y"]


def test_reset_and_text_clear_unselect_everything():
    combo = _combo("a", "b")
    combo.set_current_text(["a", "b"])
    combo.reset_selection()
    assert combo.current_text() == []
    combo.set_current_text(["b"])
    combo.text_clear()
    assert combo.text == ""
    assert combo.current_text() == []


def test_round_trip_through_joined_text():
    source = _combo("1号电磁阀", "F01电磁阀", "F10电磁阀")
    source.set_current_text(["F01电磁阀", "F10电磁阀"])
    target = _combo("1号电磁阀", "F01电磁阀", "F10电磁阀")
    target.set_current_text(",".join(source.current_text()).split(","))
    assert target.current_text() == source.current_text()


def test_search_is_case_insensitive():
    combo = _combo("Alpha", "beta", "ALPHABET")
    combo.search("alpha")
    assert combo.visible_items() == ["Alpha", "ALPHABET"]
    combo.search("")
    assert combo.visible_items() == ["Alpha", "beta", "ALPHABET"]


def test_search_keeps_selection():
    combo = _combo("Alpha", "beta")
    combo.toggle(2)
    combo.search("alpha")
    assert combo.current_text() == ["beta"]


def test_clear_removes_items_and_applies_hidden_flag():
    combo = _combo("a", "b")
    combo.toggle(1)
    assert combo.search_bar_hidden is False
    combo.clear()
    assert combo.count() == 0
    assert combo.current_text() == []
    assert combo.search_bar_hidden is True


def test_set_search_bar_hidden_survives_clear():
    combo = _combo("a")
    combo.set_search_bar_hidden(False)
    combo.clear()
    assert combo.search_bar_hidden is False
    combo.set_search_bar_hidden(True)
    assert combo.search_bar_hidden is True


def test_change_callback_receives_joined_text():
    seen = []
    combo = MultiSelect(on_change=seen.append)
    combo.add_items(["a", "b"])
    combo.toggle(1)
    combo.toggle(2)
    combo.toggle(1)
    assert seen == ["a", "a;b", "b"]


def test_callback_not_called_without_state_change():
    seen = []
    combo = MultiSelect(on_change=seen.append)
    combo.add_items(["a", "b"])
    combo.set_current_text(["a"])
    combo.set_current_text(["a"])
    combo.reset_selection()
    combo.reset_selection()
    assert seen == ["a", ""]