"""Indentation stripping for indented ('' ... '') string literals."""

from __future__ import annotations

# A part is literal text, or None standing for an interpolated expression.
Part = str | None


def strip_indentation(parts: list[Part]) -> list[Part]:
    """Apply indented-string whitespace rules to a string's parts.

    Algorithm:
    1. The common indentation is the smallest number of leading spaces over
       all lines holding a non-space character or an interpolation. Lines of
       only spaces do not count. Tabs are content, not indentation.
    2. Remove up to that many leading spaces from every line.
    3. If the first line is blank (spaces/tabs only), discard it with its newline.
    4. If the last line is blank, discard its content (the newline before it stays).
    5. Merge adjacent text and drop empty text parts.

    Parts arrive with escapes already resolved, so a space or newline written
    as an escape (for example ''\\n) counts here exactly like a literal one.
    """
    indent = _common_indent(parts)
    stripped = _dedent(parts, indent)

    if stripped and isinstance(stripped[0], str):
        first, sep, rest = stripped[0].partition("\n")
        if sep and _is_blank(first):
            stripped[0] = rest

    if stripped and isinstance(stripped[-1], str):
        last = stripped[-1]
        head, sep, tail = last.rpartition("\n")
        if sep and _is_blank(tail):
            stripped[-1] = head + sep
        elif not sep and len(stripped) == 1 and _is_blank(last):
            stripped[-1] = ""

    return _merge(stripped)


def _common_indent(parts: list[Part]) -> int | None:
    indent: int | None = None
    at_line_start = True
    current = 0

    def record() -> None:
        nonlocal indent
        if indent is None or current < indent:
            indent = current

    for part in parts:
        if part is None:
            if at_line_start:
                record()
                at_line_start = False
            continue
        for ch in part:
            if at_line_start:
                if ch == " ":
                    current += 1
                elif ch == "\n":
                    current = 0
                else:
                    record()
                    at_line_start = False
            elif ch == "\n":
                at_line_start = True
                current = 0
    return indent


def _dedent(parts: list[Part], indent: int | None) -> list[Part]:
    out: list[Part] = []
    at_line_start = True
    dropped = 0

    for part in parts:
        if part is None:
            out.append(None)
            at_line_start = False
            continue
        chars = []
        for ch in part:
            if at_line_start and ch == " " and (indent is None or dropped < indent):
                dropped += 1
                continue
            chars.append(ch)
            if ch == "\n":
                at_line_start = True
                dropped = 0
            else:
                at_line_start = False
        out.append("".join(chars))
    return out


def _merge(parts: list[Part]) -> list[Part]:
    merged: list[Part] = []
    for part in parts:
        if part is None:
            merged.append(None)
        elif part:
            if merged and isinstance(merged[-1], str):
                merged[-1] += part
            else:
                merged.append(part)
    return merged


def _is_blank(line: str) -> bool:
    """Return True if line contains only spaces and tabs (or is empty)."""
    return all(ch in " \t" for ch in line)
