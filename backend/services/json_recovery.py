"""Recover JSON objects from free-form language-model output.

Pipeline (order matters):
    extract_json_text        prose / code fences -> candidate JSON text
    remove_comments          // and /* */ outside strings
    quote_unquoted_keys      {key: 1} -> {"key": 1}
    normalize_quotes         'value' -> "value"
    remove_trailing_commas   [1, 2,] -> [1, 2]
    escape_control_characters raw newlines/tabs inside strings
    close_unclosed_brackets  truncated output -> balanced brackets

Every step that needs to know whether a character sits inside a string
literal uses the same StringScanner.
"""

import json
import logging
import re
from typing import Any, Iterator, NamedTuple

logger = logging.getLogger(__name__)

JSON_OUTPUT_INSTRUCTIONS = """Respond with ONLY a single valid JSON object:
- No markdown, no code fences, no commentary before or after the JSON
- Use double quotes for all keys and string values
- No trailing commas and no comments
- Escape newlines inside strings as \\n"""

_CLOSERS = {"{": "}", "[": "]"}
_CONTROL_ESCAPES = {"\n": "\\n", "\r": "\\r", "\t": "\\t"}

_FENCE_RE = re.compile(r"```[ \t]*(?:json|JSON)?[ \t]*\r?\n?(.*?)```", re.DOTALL)
_UNQUOTED_KEY_RE = re.compile(r"([{,]\s*)([A-Za-z_][A-Za-z0-9_]*)(\s*:)")
_TRAILING_COMMA_RE = re.compile(r",(\s*[\]}])")

KEY_QUOTING_PASSES = 3


class ParseError(ValueError):
    """JSON could not be recovered; carries both texts for diagnosis."""

    def __init__(self, message: str, raw: str, repaired: str):
        super().__init__(message)
        self.raw = raw
        self.repaired = repaired


class ScanChar(NamedTuple):
    index: int
    char: str
    in_string: bool  # string content, delimiters excluded
    delimiter: bool  # quote that opens or closes a string
    escaped: bool  # follows an escaping backslash


class StringScanner:
    """Character scanner that tracks string-literal state.

    ``quotes`` lists the characters that may delimit a string. A string
    opened by one delimiter only closes on the same delimiter, so an
    apostrophe inside a double-quoted string is plain content. Consumers
    may jump ahead with :meth:`skip_to` while iterating.
    """

    def __init__(self, text: str, quotes: str = '"'):
        self.text = text
        self.quotes = quotes
        self.pos = 0
        self.quote: str | None = None
        self._escape_next = False

    @property
    def in_string(self) -> bool:
        return self.quote is not None

    @property
    def escape_pending(self) -> bool:
        return self._escape_next

    def skip_to(self, index: int) -> None:
        self.pos = index
        self._escape_next = False

    def __iter__(self) -> Iterator[ScanChar]:
        text = self.text
        while self.pos < len(text):
            i = self.pos
            ch = text[i]
            self.pos += 1

            if self._escape_next:
                self._escape_next = False
                yield ScanChar(i, ch, self.in_string, False, True)
            elif ch == "\\":
                self._escape_next = True
                yield ScanChar(i, ch, self.in_string, False, False)
            elif ch in self.quotes and (self.quote is None or ch == self.quote):
                self.quote = ch if self.quote is None else None
                yield ScanChar(i, ch, False, True, False)
            else:
                yield ScanChar(i, ch, self.in_string, False, False)


def scan_json_text(text: str, quotes: str = '"') -> StringScanner:
    return StringScanner(text, quotes)


def string_mask(text: str, quotes: str = '"') -> list[bool]:
    """For each index, True if the character is part of a string literal (delimiters included)."""
    mask = [False] * len(text)
    for c in scan_json_text(text, quotes):
        mask[c.index] = c.in_string or c.delimiter
    return mask


def _is_structural(c: ScanChar) -> bool:
    return not (c.in_string or c.delimiter or c.escaped)


# ---------------------------------------------------------------------------
# Step 1: extraction
# ---------------------------------------------------------------------------


def _balanced_object(text: str) -> str | None:
    start = text.find("{")
    if start == -1:
        return None

    depth = 0
    scanner = scan_json_text(text)
    scanner.skip_to(start)
    for c in scanner:
        if not _is_structural(c):
            continue
        if c.char == "{":
            depth += 1
        elif c.char == "}":
            depth -= 1
            if depth == 0:
                return text[start:c.index + 1]

    end = text.rfind("}")
    if end > start:
        return text[start:end + 1]
    # Truncated output: keep everything after the opening brace
    return text[start:]


def extract_json_text(text: str) -> str:
    """Pull the most likely JSON object out of a model response."""
    cleaned = text.lstrip("\ufeff").strip()

    blocks = list(_FENCE_RE.finditer(cleaned))
    if blocks:
        last = blocks[-1]
        if not cleaned[last.end():].strip():
            content = last.group(1).strip()
            if content.startswith("{") and content.endswith("}"):
                return content
        for block in blocks:
            content = block.group(1).strip()
            if content.startswith("{"):
                return content

    candidate = _balanced_object(cleaned)
    if candidate is not None:
        return candidate
    return cleaned


# ---------------------------------------------------------------------------
# Steps 2-7: repair
# ---------------------------------------------------------------------------


def remove_comments(text: str) -> str:
    if "/" not in text:
        return text

    out = []
    scanner = scan_json_text(text)
    for c in scanner:
        if c.char == "/" and _is_structural(c):
            nxt = text[c.index + 1:c.index + 2]
            if nxt == "/":
                end = text.find("\n", c.index)
                scanner.skip_to(len(text) if end == -1 else end)
                continue
            if nxt == "*":
                end = text.find("*/", c.index + 2)
                scanner.skip_to(len(text) if end == -1 else end + 2)
                continue
        out.append(c.char)
    return "".join(out)


def quote_unquoted_keys(text: str, passes: int = KEY_QUOTING_PASSES) -> str:
    for _ in range(passes):
        mask = string_mask(text, quotes="\"'")

        def _quote(m: re.Match) -> str:
            if mask[m.start()]:
                return m.group(0)
            return f'{m.group(1)}"{m.group(2)}"{m.group(3)}'

        updated = _UNQUOTED_KEY_RE.sub(_quote, text)
        if updated == text:
            break
        text = updated
    return text


def normalize_quotes(text: str) -> str:
    """Turn single-quoted strings into double-quoted ones."""
    if "'" not in text:
        return text

    out = []
    scanner = scan_json_text(text, quotes="\"'")
    for c in scanner:
        if c.delimiter and c.char == "'":
            out.append('"')
            continue
        if scanner.quote == "'" and not c.delimiter:
            if c.char == '"' and not c.escaped:
                out.append('\\"')
                continue
            if c.char == "\\" and text[c.index + 1:c.index + 2] == "'":
                # \' is not a valid JSON escape
                out.append("'")
                scanner.skip_to(c.index + 2)
                continue
        out.append(c.char)
    return "".join(out)


def remove_trailing_commas(text: str) -> str:
    if "," not in text:
        return text
    mask = string_mask(text)
    return _TRAILING_COMMA_RE.sub(
        lambda m: m.group(0) if mask[m.start()] else m.group(1),
        text,
    )


def escape_control_characters(text: str) -> str:
    out = []
    for c in scan_json_text(text):
        if c.in_string and not c.escaped and c.char in _CONTROL_ESCAPES:
            out.append(_CONTROL_ESCAPES[c.char])
        else:
            out.append(c.char)
    return "".join(out)


def close_unclosed_brackets(text: str) -> str:
    """Append whatever closers a truncated document is missing, innermost first."""
    stack: list[str] = []
    scanner = scan_json_text(text)
    for c in scanner:
        if not _is_structural(c):
            continue
        if c.char in _CLOSERS:
            stack.append(c.char)
        elif c.char in ("}", "]") and stack and _CLOSERS[stack[-1]] == c.char:
            stack.pop()

    if not stack and not scanner.in_string:
        return text

    repaired = text
    if scanner.in_string:
        if scanner.escape_pending:
            repaired = repaired[:-1]
        repaired += '"'

    repaired = repaired.rstrip()
    if repaired.endswith(","):
        repaired = repaired[:-1]
    elif repaired.endswith(":"):
        repaired += " null"
    return repaired + "".join(_CLOSERS[b] for b in reversed(stack))


def repair_json(text: str) -> str:
    """Apply every repair step in order. Valid JSON passes through unchanged."""
    repaired = remove_comments(text)
    repaired = quote_unquoted_keys(repaired)
    repaired = normalize_quotes(repaired)
    repaired = remove_trailing_commas(repaired)
    repaired = escape_control_characters(repaired)
    return close_unclosed_brackets(repaired)


def parse_model_json(raw: str) -> Any:
    """Extract, repair and parse JSON from a model response.

    Raises ParseError carrying the raw and repaired text if nothing parses.
    """
    extracted = extract_json_text(raw)
    try:
        return json.loads(extracted)
    except json.JSONDecodeError:
        pass

    repaired = repair_json(extracted)
    try:
        return json.loads(repaired)
    except json.JSONDecodeError as e:
        logger.error("Failed to parse AI response as JSON: %s", e)
        logger.error("Raw response (first 500 chars): %s", raw[:500])
        logger.error("Repaired text (first 500 chars): %s", repaired[:500])
        raise ParseError(f"Failed to parse AI response as JSON: {e}", raw=raw, repaired=repaired) from e
