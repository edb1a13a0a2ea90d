from __future__ import annotations

import sys
from typing import TYPE_CHECKING, Protocol, cast

if TYPE_CHECKING:
    from typing_extensions import TypeGuard


class Notes(Protocol):
    __notes__: list[str]


def has_notes(exc: BaseException) -> TypeGuard[Notes]:
    return isinstance(getattr(exc, "__notes__", None), list)


if sys.version_info >= (3, 11):

    def add_note(exc: BaseException, note: str) -> None:
        exc.add_note(note)

else:

    def add_note(exc: BaseException, note: str) -> None:
        if not isinstance(note, str):
            raise TypeError("note must be a str")
        if has_notes(exc):
            exc.__notes__.append(note)
        else:
            cast(Notes, exc).__notes__ = [note]
