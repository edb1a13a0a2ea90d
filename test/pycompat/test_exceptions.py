from __future__ import annotations

import pytest

from errorjson._pycompat.exceptions import add_note, has_notes


def test_add_note() -> None:
    error = ValueError("Oops")
    assert not has_notes(error)

    add_note(error, "First")
    add_note(error, "Second")

    assert has_notes(error)
    assert error.__notes__ == ["First", "Second"]


def test_add_note__note_must_be_str() -> None:
    with pytest.raises(TypeError):
        add_note(ValueError(), 42)  # type: ignore[arg-type]
