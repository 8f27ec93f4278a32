from __future__ import annotations

import pytest
from PyQt6.QtWidgets import QPlainTextEdit

from pynote.domain.models import SearchOptions
from pynote.services.ui.find_replace import FindReplaceDialog, PlainTextSearchService
from pynote.services.ui.ports.messages import Answer
from pynote.utils.constants import APP_NAME

# ------------------------------
# Fakes
# ------------------------------


class FakeEditor:
    """In-memory EditorPort."""

    def __init__(self, text: str, start: int = 0, length: int = 0) -> None:
        self._text = text
        self._sel = (start, length)
        self.full_replacements = 0

    def text(self) -> str:
        return self._text

    def selection(self) -> tuple[int, int]:
        return self._sel

    def selected_text(self) -> str:
        s, n = self._sel
        return self._text[s : s + n]

    def set_selection(self, start: int, length: int) -> None:
        self._sel = (start, length)

    def replace_selection(self, start: int, length: int, replacement: str) -> None:
        self._text = self._text[:start] + replacement + self._text[start + length :]
        self._sel = (start + len(replacement), 0)

    def replace_all_text(self, text: str) -> None:
        self._text = text
        self.full_replacements += 1


class FakeMessages:
    def __init__(self) -> None:
        self.infos: list[str] = []
        self.titles: list[str] = []

    def info(self, parent, title, text):
        self.titles.append(title)
        self.infos.append(text)

    def warning(self, parent, title, text):
        self.infos.append(text)

    def error(self, parent, title, text):
        self.infos.append(text)

    def ask(self, parent, title, text):
        return True

    def ask_save_changes(self, parent, title, text):
        return Answer.NO


# ------------------------------
# PlainTextSearchService
# ------------------------------


def test_service_find_selects_match_and_remembers_options():
    ed = FakeEditor("one two one")
    svc = PlainTextSearchService(ed)
    opt = SearchOptions("one")

    assert svc.find(opt).found
    assert ed.selection() == (0, 3)
    assert svc.last_options == opt


def test_service_find_again_walks_matches():
    ed = FakeEditor("x ab ab ab", 0, 0)
    svc = PlainTextSearchService(ed)
    assert svc.find_again() is None

    svc.find(SearchOptions("ab"))
    first = ed.selection()
    svc.find_again()
    assert ed.selection()[0] > first[0]

    svc.find_again(reverse=True)
    assert ed.selection() == first


def test_service_find_miss_leaves_selection():
    ed = FakeEditor("abc", 1, 1)
    svc = PlainTextSearchService(ed)
    assert svc.find(SearchOptions("zzz")).found is False
    assert ed.selection() == (1, 1)


def test_service_empty_needle_is_noop():
    ed = FakeEditor("abc")
    svc = PlainTextSearchService(ed)
    assert svc.find(SearchOptions("")).found is False
    assert svc.last_options is None
    assert svc.replace_all(SearchOptions(""), "x").replaced == 0
    assert ed.text() == "abc"


def test_service_replace_one_replaces_selected_match_then_selects_next():
    ed = FakeEditor("cat cat cat", 0, 3)
    svc = PlainTextSearchService(ed)
    result = svc.replace_one(SearchOptions("cat"), "dog")

    assert result.replaced == 1
    assert ed.text() == "dog cat cat"
    assert ed.selection() == (4, 3)


def test_service_replace_one_without_live_match_only_finds():
    ed = FakeEditor("cat cat", 0, 0)
    svc = PlainTextSearchService(ed)
    result = svc.replace_one(SearchOptions("cat"), "dog")

    assert result.replaced == 0
    assert ed.text() == "cat cat"
    assert ed.selected_text() == "cat"


def test_service_replace_all_case_insensitive():
    ed = FakeEditor("Cat cat CAT", 5, 0)
    svc = PlainTextSearchService(ed)
    result = svc.replace_all(SearchOptions("cat", match_case=False), "dog")

    assert result.replaced == 3
    assert ed.text() == "dog dog dog"
    assert ed.full_replacements == 1


def test_service_replace_all_without_matches_leaves_text():
    ed = FakeEditor("abc")
    svc = PlainTextSearchService(ed)
    assert svc.replace_all(SearchOptions("x"), "y").replaced == 0
    assert ed.full_replacements == 0


# ------------------------------
# FindReplaceDialog
# ------------------------------


@pytest.fixture()
def messages() -> FakeMessages:
    return FakeMessages()


@pytest.fixture()
def dialog(qapp, messages):
    edit = QPlainTextEdit()
    edit.setPlainText("alpha beta Alpha")
    d = FindReplaceDialog(edit, messages)
    yield d, edit
    d.close()


def test_dialog_modes(dialog):
    d, _ = dialog
    d.show_find("beta")
    assert d.windowTitle() == "Find"
    assert not d.is_replace_mode
    assert d.find_edit.text() == "beta"

    d.show_replace()
    assert d.windowTitle() == "Replace"
    assert d.is_replace_mode


def test_dialog_buttons_follow_needle(dialog):
    d, _ = dialog
    d.show_find()
    d.find_edit.setText("")
    assert not d.find_next_btn.isEnabled()
    d.find_edit.setText("a")
    assert d.find_next_btn.isEnabled()


def test_dialog_flags_feed_options(dialog):
    d, _ = dialog
    d.set_flags(match_case=True, search_down=False)
    d.find_edit.setText("x")
    assert d.options() == SearchOptions("x", match_case=True, search_down=False)


def test_dialog_find_next_reports_missing_text(dialog, messages):
    d, _ = dialog
    d.show_find()
    d.find_edit.setText("gamma")
    assert d.find_next() is False
    assert messages.infos == ['Cannot find "gamma"']
    assert messages.titles == [APP_NAME]


def test_dialog_replace_all_counts_and_signals(dialog):
    d, edit = dialog
    seen: list[int] = []
    d.text_replaced.connect(seen.append)

    d.show_replace()
    d.find_edit.setText("alpha")
    d.replace_edit.setText("omega")
    assert d.replace_all() == 2

    assert edit.toPlainText() == "omega beta omega"
    assert seen == [2]
    assert d.windowTitle() == "Replace - 2 replaced"
