# src/taskprops/parsing/scanner.py

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass

LINE_BREAK = "\r\n"


@dataclass(slots=True, frozen=True)
class ScanResult:
    remaining: str
    # Accepted lines, bottom-most first (scan order).
    consumed: tuple[str, ...]


def scan_trailing_commands(text: str, accept: Callable[[str], bool]) -> ScanResult:
    """
    Walk the lines of `text` from the last one upwards, handing each to `accept`.

    Scanning stops at the first line `accept` rejects, or when the top of the
    text is reached. Only CRLF separates lines; a bare LF or CR stays inside the
    line. `remaining` is the text above the accepted block, without the line
    break that preceded the first accepted line.
    """
    if not text:
        return ScanResult(remaining=text, consumed=())

    lines = text.split(LINE_BREAK)
    consumed: list[str] = []
    while lines:
        if not accept(lines[-1]):
            break
        consumed.append(lines.pop())

    if not consumed:
        return ScanResult(remaining=text, consumed=())
    return ScanResult(remaining=LINE_BREAK.join(lines), consumed=tuple(consumed))
