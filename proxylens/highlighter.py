"""
Regex Highlighter — Judge Response Markup

Marks pattern matches inside a judge response body for display. The
output is always HTML-safe: every raw substring is escaped exactly once,
and only matched spans are wrapped in the mark element.

Highlight specs:
  - "default"          the standard request headers (USER-AGENT, HOST, ...),
                       case-insensitive, "-" also matching "_"
  - "/pattern/flags"   delimited pattern with flags (g, i, m, s, u, y)
  - anything else      raw pattern, always global

A pattern that does not compile never raises: the body comes back
escaped without highlights. Scans that run past the time budget stop
early and return the rest of the body unhighlighted.
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from typing import Iterable, Optional

from proxylens.config import settings
from proxylens.escaper import escape

logger = logging.getLogger(__name__)

DEFAULT_SPEC = "default"

# Delimited literal: /inner/flags (inner may itself contain slashes)
_DELIMITED = re.compile(r"^/(?P<pattern>.*)/(?P<flags>[A-Za-z]*)\Z", re.DOTALL)

# re.compile raises OverflowError for huge repeat counts and
# RecursionError for deeply nested groups
_COMPILE_ERRORS = (re.error, ValueError, OverflowError, RecursionError)

_FLAG_MAP: dict[str, int] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "u": 0,
}


@dataclass(frozen=True)
class CompiledHighlight:
    """A compiled pattern plus the scan mode its flags asked for."""
    regex: re.Pattern
    is_global: bool = True
    sticky: bool = False


# ============================================================
# PATTERN RESOLUTION
# ============================================================

def build_default_pattern(tokens: Optional[Iterable[str]] = None) -> str:
    """Alternation of header names; '-' matches '-' or '_'."""
    tokens = list(tokens if tokens is not None else settings.STANDARD_HEADERS)
    parts = [re.escape(t).replace(r"\-", "-").replace("-", "[-_]") for t in tokens if t]
    return "|".join(parts)


def compile_flags(flags: str) -> tuple[int, bool, bool]:
    """
    Translate flag letters into re flags.

    Returns (re_flags, is_global, sticky). Raises ValueError on an
    unknown or repeated letter.
    """
    re_flags = 0
    is_global = False
    sticky = False
    if len(set(flags)) != len(flags):
        raise ValueError(f"repeated flag in {flags!r}")
    for letter in flags:
        if letter == "g":
            is_global = True
        elif letter == "y":
            sticky = True
        elif letter in _FLAG_MAP:
            re_flags |= _FLAG_MAP[letter]
        else:
            raise ValueError(f"unknown flag {letter!r}")
    return re_flags, is_global, sticky


def resolve_pattern(
    spec: Optional[str],
    header_tokens: Optional[Iterable[str]] = None,
) -> Optional[CompiledHighlight]:
    """
    Compile a highlight spec, or None when nothing usable remains.

    Fallback chain for user patterns:
      1. delimited or raw pattern, global flag forced on
      2. the whole spec string as a plain pattern, no flags
      3. give up (None)
    """
    if spec is None or not str(spec).strip():
        return None
    spec = str(spec)

    if spec == DEFAULT_SPEC:
        pattern = build_default_pattern(header_tokens)
        if not pattern:
            return None
        try:
            return CompiledHighlight(re.compile(pattern, re.IGNORECASE))
        except _COMPILE_ERRORS as e:
            logger.debug("Default highlight pattern failed: %s", e, extra={"error": str(e)})
            return None

    delimited = _DELIMITED.match(spec)
    if delimited:
        pattern, flags = delimited.group("pattern"), delimited.group("flags")
    else:
        pattern, flags = spec, ""

    try:
        re_flags, _, sticky = compile_flags(flags)
        return CompiledHighlight(re.compile(pattern, re_flags), sticky=sticky)
    except _COMPILE_ERRORS as e:
        logger.debug(
            "Highlight pattern rejected, retrying raw: %s", e,
            extra={"pattern": spec, "flags": flags, "error": str(e)},
        )

    try:
        return CompiledHighlight(re.compile(spec), is_global=False)
    except _COMPILE_ERRORS as e:
        logger.debug(
            "Highlight pattern unusable: %s", e,
            extra={"pattern": spec, "error": str(e)},
        )
        return None


# ============================================================
# SCANNING
# ============================================================

def wrap_matches(
    body: str,
    compiled: CompiledHighlight,
    budget_ms: Optional[float] = None,
) -> str:
    """
    Escape body and wrap each match in the mark element.

    Matches are taken left to right and never overlap. An empty match
    moves the search position on by one character so the scan always
    terminates.
    """
    tag = settings.MARK_TAG
    budget = settings.HIGHLIGHT_BUDGET_MS if budget_ms is None else budget_ms
    started = time.monotonic()

    parts: list[str] = []
    last_index = 0   # end of the text already emitted
    search_at = 0    # where the next search starts
    matches = 0

    while search_at <= len(body):
        if compiled.sticky:
            match = compiled.regex.match(body, search_at)
        else:
            match = compiled.regex.search(body, search_at)
        if match is None:
            break

        start, end = match.span()
        parts.append(escape(body[last_index:start]))
        parts.append(f"<{tag}>{escape(match.group(0))}</{tag}>")
        last_index = end
        search_at = end + 1 if end == start else end
        matches += 1

        if not compiled.is_global:
            break

        elapsed_ms = (time.monotonic() - started) * 1000
        if budget and elapsed_ms > budget:
            logger.warning(
                "Highlight scan budget exceeded; rest of body left unmarked",
                extra={
                    "pattern": compiled.regex.pattern,
                    "matches": matches,
                    "body_length": len(body),
                    "duration_ms": round(elapsed_ms, 1),
                },
            )
            break

    parts.append(escape(body[last_index:]))
    return "".join(parts)


def highlight(
    body: Optional[str],
    spec: Optional[str],
    *,
    header_tokens: Optional[Iterable[str]] = None,
) -> str:
    """
    HTML-safe rendering of body with spec matches marked.

    Args:
        body: Response body from a judge.
        spec: "default", "/pattern/flags", a raw pattern, or None.
        header_tokens: Overrides the standard header list for "default".
    """
    if not body:
        return ""
    if spec is None or not str(spec).strip():
        return escape(body)

    if len(body) > settings.HIGHLIGHT_MAX_BODY:
        logger.warning(
            "Body too large to highlight",
            extra={"body_length": len(body), "pattern": spec},
        )
        return escape(body)

    compiled = resolve_pattern(spec, header_tokens)
    if compiled is None:
        return escape(body)

    try:
        return wrap_matches(body, compiled)
    except RecursionError as e:
        logger.warning(
            "Highlight scan failed: %s", e,
            extra={"pattern": spec, "error_type": type(e).__name__},
        )
        return escape(body)
