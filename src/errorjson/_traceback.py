from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from itertools import zip_longest
from traceback import FrameSummary, StackSummary, TracebackException, walk_stack
from typing import Generator, cast

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__)) + os.sep


def format_exception_stack(exc: BaseException) -> str:
    r"""Get the `stack` string of a Python exception, in the style of a V8 Error.

    V8 stacks start with the error's `"Name: message"` line, followed by the
    most recent call first, without source lines. For example:

    ```
    ValueError: Unable to do the thing
        at failing_operation (/app/things.py:66:12)
        at main (/app/main.py:11:8)
    ```

    Context exceptions (`__context__`) and sub-exceptions of exception groups
    are included after the main stack. Explicit causes are not followed beyond
    what Python records as context.
    """
    tbe = TracebackException.from_exception(exc)
    return "".join(format_exception_for_v8(tbe)).rstrip()


def format_exception_for_v8(
    tbe: TracebackException, group_path: Sequence[int] = ()
) -> Generator[str]:
    r"""Render a `TracebackException` as lines ending with `"\n"`."""
    yield from _format_v8_stack(tbe, group_path=group_path)

    context = tbe
    while context.__context__ and not context.__suppress_context__:
        context = context.__context__
        yield "\n"
        yield "The above exception occurred while handling another exception:\n"
        yield "\n"
        yield from _format_v8_stack(context, group_path=())


def _format_v8_stack(
    tbe: TracebackException, *, group_path: Sequence[int]
) -> Generator[str]:
    yield from tbe.format_exception_only()
    yield from (format_v8_frame(fs) for fs in reversed(tbe.stack))

    sub_exceptions = cast(
        "Sequence[TracebackException] | None", getattr(tbe, "exceptions", None)
    )  # 3.11+
    for i, sub_tbe in enumerate(sub_exceptions or (), start=1):
        sub_group_path = [*group_path, i]
        label = ".".join(map(str, sub_group_path))
        yield "\n"
        yield from _prefix_lines(
            format_exception_for_v8(sub_tbe, group_path=sub_group_path),
            [f"  ↳ {label}: ", "    "],
        )


def _prefix_lines(lines: Iterable[str], prefixes: Iterable[str]) -> Generator[str]:
    prefix = ""
    for line, next_prefix in zip_longest(lines, prefixes):
        if line is None:
            return
        if next_prefix is not None:
            prefix = next_prefix
        result = f"{prefix}{line}"
        yield result.lstrip(" ") if result.isspace() else result


def format_v8_frame(fs: FrameSummary) -> str:
    if fs.filename is None and fs.lineno is None:
        return f"    at {fs.name} (unknown location)\n"
    # colno is available from 3.11
    colno = getattr(fs, "colno", None)
    location = ":".join(
        "<unknown>" if part is None else str(part)
        for part in (fs.filename, fs.lineno, colno)
    )
    return f"    at {fs.name} ({location})\n"


def capture_stack(name: str, message: str) -> str:
    """Get a V8-style stack for an error created at the current point of execution.

    Frames inside the errorjson package are left out, so the first frame listed
    is the code that requested the error.
    """
    frames = StackSummary.extract(walk_stack(sys._getframe()), lookup_lines=False)
    header = f"{name}: {message}" if message else name
    return "".join(
        [
            f"{header}\n",
            *(
                format_v8_frame(fs)
                for fs in frames
                if not fs.filename.startswith(_PACKAGE_DIR)
            ),
        ]
    ).rstrip()
