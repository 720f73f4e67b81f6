"""
Fragment codec: read and write the files a documentation generator emits.

Two shapes are understood:

- script fragments, as written by the generator::

      (function() {var implementors = {};
      implementors['com_rs'] = ["impl ... for ComPtr&lt;U&gt;",];
      ...
      })()

- JSON fragments: ``{"com_rs": ["impl ... for ComPtr&lt;U&gt;"]}``

Only the ``implementors[<key>] = [<strings>];`` assignments are read from a
script fragment; the surrounding delivery code is ignored. Entries are kept
exactly as written (HTML entities included).

Tags:
    implindex, fragments, codec, file-format

Doc-Types:
    api-reference
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Literal

from implindex.core.errors import FragmentParseError
from implindex.registry.models import Contribution

FragmentFormat = Literal["js", "json"]

_ASSIGNMENT = re.compile(
    r"""implementors\s*\[\s*(?P<quote>['"])(?P<key>(?:\\.|(?!(?P=quote)).)*)(?P=quote)\s*\]\s*=\s*""",
    re.DOTALL,
)

_SCRIPT_TEMPLATE = """(function() {{var implementors = {{}};
{assignments}

    if (window.register_implementors) {{
        window.register_implementors(implementors);
    }} else {{
        (window.pending_implementors = window.pending_implementors || []).push(implementors);
    }}
}})()
"""


_JSON_ESCAPES = frozenset('"\\/bfnrtu')
# JS escapes with no JSON spelling.
_JS_ESCAPES = {"'": "'", "v": "\\u000b", "0": "\\u0000"}
_LINE_TERMINATORS = frozenset("\n\u2028\u2029")
_HEX = frozenset("0123456789abcdefABCDEF")
_DECODER = json.JSONDecoder(strict=False)


def _decode_string(raw: str) -> str:
    """Decode the body of a JS string literal.

    JS escapes are rewritten to their JSON form and the result is decoded
    leniently, so raw tabs and other control characters survive.
    """
    chars: list[str] = []
    i = 0
    while i < len(raw):
        ch = raw[i]
        if ch != "\\" or i + 1 >= len(raw):
            chars.append('\\"' if ch == '"' else ch)
            i += 1
            continue

        nxt = raw[i + 1]
        if nxt in _JSON_ESCAPES:
            chars.append("\\" + nxt)
            i += 2
        elif nxt == "x":
            digits = raw[i + 2 : i + 4]
            if len(digits) != 2 or not set(digits) <= _HEX:
                raise FragmentParseError("invalid \\x escape in string literal")
            chars.append("\\u00" + digits)
            i += 4
        elif nxt in _JS_ESCAPES:
            chars.append(_JS_ESCAPES[nxt])
            i += 2
        elif nxt == "\r":
            # Line continuation, CRLF or bare CR.
            i += 3 if raw[i + 2 : i + 3] == "\n" else 2
        elif nxt in _LINE_TERMINATORS:
            i += 2
        else:
            # Non-escape characters stand for themselves.
            chars.append(nxt)
            i += 2
    try:
        return _DECODER.decode('"' + "".join(chars) + '"')
    except json.JSONDecodeError as e:
        raise FragmentParseError(f"invalid string literal: {e.msg}", cause=e) from e


def _read_string(text: str, pos: int) -> tuple[str, int]:
    quote = text[pos]
    i = pos + 1
    while i < len(text):
        ch = text[i]
        if ch == "\\":
            i += 2
            continue
        if ch == quote:
            return _decode_string(text[pos + 1 : i]), i + 1
        i += 1
    raise FragmentParseError("unterminated string literal").with_context(offset=pos)


def _skip_ws(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _read_array(text: str, pos: int) -> tuple[list[str], int]:
    """Read a JS array of string literals starting at ``text[pos] == '['``."""
    if pos >= len(text) or text[pos] != "[":
        raise FragmentParseError("expected '[' after implementors assignment").with_context(offset=pos)

    entries: list[str] = []
    pos = _skip_ws(text, pos + 1)
    while pos < len(text):
        ch = text[pos]
        if ch == "]":
            return entries, pos + 1
        if ch not in "'\"":
            raise FragmentParseError(f"expected string entry, found {ch!r}").with_context(offset=pos)
        entry, pos = _read_string(text, pos)
        entries.append(entry)
        pos = _skip_ws(text, pos)
        if pos < len(text) and text[pos] == ",":
            pos = _skip_ws(text, pos + 1)
        elif pos < len(text) and text[pos] != "]":
            raise FragmentParseError(f"expected ',' or ']', found {text[pos]!r}").with_context(offset=pos)
    raise FragmentParseError("unterminated implementors array")


def _parse_script(text: str, source: str | None) -> Contribution:
    buckets: dict[str, list[str]] = {}
    for match in _ASSIGNMENT.finditer(text):
        key = _decode_string(match.group("key"))
        entries, _ = _read_array(text, match.end())
        # Repeated keys inside one fragment append in order.
        buckets.setdefault(key, []).extend(entries)

    if not buckets:
        raise FragmentParseError("no implementors assignments found")
    return Contribution(buckets=buckets, source=source)


def _parse_json(text: str, source: str | None) -> Contribution:
    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise FragmentParseError(f"invalid JSON fragment: {e.msg}", cause=e) from e
    if not isinstance(data, dict):
        raise FragmentParseError(f"JSON fragment must be an object, got {type(data).__name__}")
    return Contribution(buckets=data, source=source)


def parse_fragment(text: str, source: str | None = None) -> Contribution:
    """Parse fragment text into one contribution.

    The shape is detected from the text: a leading ``{`` means JSON,
    anything else is treated as a script fragment.

    Raises:
        FragmentParseError: If no implementors payload can be read
    """
    try:
        if text.lstrip().startswith("{"):
            return _parse_json(text, source)
        return _parse_script(text, source)
    except FragmentParseError as e:
        raise e.with_context(source=source)


def render_fragment(contribution: Contribution, format: FragmentFormat = "js") -> str:
    """Serialize a contribution as fragment text."""
    if format == "json":
        payload = {key: list(entries) for key, entries in contribution.buckets.items()}
        return json.dumps(payload, ensure_ascii=False, indent=2) + "\n"

    lines = []
    for key, entries in contribution.buckets.items():
        body = "".join(json.dumps(entry, ensure_ascii=False) + "," for entry in entries)
        lines.append(f"implementors[{json.dumps(key, ensure_ascii=False)}] = [{body}];")
    return _SCRIPT_TEMPLATE.format(assignments="\n".join(lines))


def load_fragment_file(path: Path) -> Contribution:
    """Read and parse one fragment file; ``source`` is the file name."""
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise FragmentParseError(f"cannot read fragment: {e}", cause=e).with_context(path=str(path))
    try:
        return parse_fragment(text, source=path.name)
    except FragmentParseError as e:
        raise e.with_context(path=str(path))


def write_fragment_file(path: Path, contribution: Contribution, format: FragmentFormat | None = None) -> Path:
    """Write a contribution to ``path``; format follows the suffix unless given."""
    fmt: FragmentFormat = format or ("json" if path.suffix == ".json" else "js")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(render_fragment(contribution, format=fmt), encoding="utf-8")
    return path


__all__ = [
    "FragmentFormat",
    "parse_fragment",
    "render_fragment",
    "load_fragment_file",
    "write_fragment_file",
]
