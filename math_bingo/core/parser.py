from __future__ import annotations

from dataclasses import dataclass
import logging
import math
from pathlib import Path
import random
import re
import sys
from typing import Iterable, Union


logger = logging.getLogger(__name__)

SEPARATOR = "---"

_COMMENT_RE = re.compile(r"#.*")
_OPERATOR_RE = re.compile(r"[><]=?")
_FROM_RE = re.compile(r"from:\s*(-?\d+(?:\.\d+)?)")
_TO_RE = re.compile(r"to:\s*(-?\d+(?:\.\d+)?)")
_STEP_RE = re.compile(r"step:\s*(-?\d+(?:\.\d+)?)")
_FRACTION_RE = re.compile(r"(\S+)/(\S+)")
_SUP_RE = re.compile(r"\^\(([^)]+)\)")
_SUB_RE = re.compile(r"_\(([^)]+)\)")

OPERATORS = {
    ">": "&gt;",
    ">=": "≥",
    "<": "&lt;",
    "<=": "≤",
}

FRACTION_CHARS = {
    "1/2": "½",
    "1/3": "⅓",
    "2/3": "⅔",
    "1/4": "¼",
    "3/4": "¾",
    "1/5": "⅕",
    "2/5": "⅖",
    "3/5": "⅗",
    "4/5": "⅘",
    "1/6": "⅙",
    "5/6": "⅚",
    "1/8": "⅛",
    "3/8": "⅜",
    "5/8": "⅝",
    "7/8": "⅞",
    "1/10": "⅒",
}

FRACTION_BAR = "⁄"

SPECIAL_CHARS = {
    "PI": "π",
    "DEG": "°",
    "SQRT": "√",
    "PROMILLE": "‰",
}


class PoolSourceError(RuntimeError):
    pass


class PoolSyntaxError(ValueError):
    pass


@dataclass(frozen=True)
class Blank:
    pass


@dataclass(frozen=True)
class Comment:
    pass


@dataclass(frozen=True)
class Separator:
    pass


@dataclass(frozen=True)
class RangeDirective:
    start: str
    stop: str
    step: str


@dataclass(frozen=True)
class Literal:
    text: str


SpecLine = Union[Blank, Comment, Separator, RangeDirective, Literal]


@dataclass(frozen=True)
class AnswerPools:
    priority: list[str]
    filler: list[str]


def _replace_operator(match: re.Match[str]) -> str:
    return OPERATORS[match.group(0)]


def substitute_operators(text: str) -> str:
    return _OPERATOR_RE.sub(_replace_operator, text)


def _replace_fraction(match: re.Match[str]) -> str:
    numerator, denominator = match.group(1), match.group(2)
    glyph = FRACTION_CHARS.get(f"{numerator}/{denominator}")
    if glyph is not None:
        return glyph
    return f"^({numerator}){FRACTION_BAR}_({denominator})"


def substitute_fractions(text: str) -> str:
    return _FRACTION_RE.sub(_replace_fraction, text)


def substitute_symbols(text: str) -> str:
    for token, glyph in SPECIAL_CHARS.items():
        text = text.replace(token, glyph)
    return text


def markup_to_tags(text: str) -> str:
    text = _SUP_RE.sub(r"<sup>\1</sup>", text)
    return _SUB_RE.sub(r"<sub>\1</sub>", text)


_LITERAL_PASSES = (substitute_fractions, substitute_symbols, markup_to_tags)


def substitute(text: str) -> str:
    """Turn a literal value into its display string (operators already replaced)."""
    for apply in _LITERAL_PASSES:
        text = apply(text)
    return text


def _search_number(pattern: re.Pattern[str], key: str, line: str, lineno: int | None) -> str:
    match = pattern.search(line)
    if match is None:
        where = f" on line {lineno}" if lineno is not None else ""
        raise PoolSyntaxError(f'Range directive{where} is missing "{key}:" ({line!r})')
    return match.group(1)


def classify_line(raw: str, *, lineno: int | None = None) -> SpecLine:
    if not raw.strip():
        return Blank()
    if raw.startswith("#"):
        return Comment()
    if raw == SEPARATOR:
        return Separator()

    line = _COMMENT_RE.sub("", raw).strip()
    if not line:
        return Comment()
    line = substitute_operators(line)

    if line.startswith("!"):
        return RangeDirective(
            start=_search_number(_FROM_RE, "from", line, lineno),
            stop=_search_number(_TO_RE, "to", line, lineno),
            step=_search_number(_STEP_RE, "step", line, lineno),
        )
    return Literal(text=line)


def _to_number(literal: str) -> int | float:
    return float(literal) if "." in literal else int(literal)


def _decimals(literal: str) -> int:
    _, _, fraction = literal.partition(".")
    return len(fraction)


def _float_steps(start: float, stop: float, step: float) -> Iterable[float]:
    # Inclusive stepping computed as start + i * step so errors don't accumulate;
    # the epsilon term lets `stop` be reached despite binary rounding.
    n = (stop - start) / step
    err = (abs(start) + abs(stop) + abs(stop - start)) / abs(step) * sys.float_info.epsilon
    count = math.floor(n + min(err, 0.5)) + 1
    for i in range(max(count, 0)):
        value = start + i * step
        if (step > 0 and value > stop) or (step < 0 and value < stop):
            value = stop
        yield value


def expand_range(directive: RangeDirective) -> list[str]:
    start = _to_number(directive.start)
    stop = _to_number(directive.stop)
    step = _to_number(directive.step)
    if step == 0:
        raise PoolSyntaxError(f"Range step must not be zero ({directive!r})")

    max_decimals = max(_decimals(directive.start), _decimals(directive.stop), _decimals(directive.step))

    if isinstance(start, int) and isinstance(stop, int) and isinstance(step, int):
        values: Iterable[int | float] = range(start, stop + (1 if step > 0 else -1), step)
    else:
        values = _float_steps(float(start), float(stop), float(step))

    out: list[str] = []
    for value in values:
        decimals = 0 if isinstance(value, float) and value.is_integer() else max_decimals
        out.append(f"{value:.{decimals}f}")
    return out


def read_pool_source(path: str | Path) -> str:
    path = Path(path)
    try:
        return path.read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as exc:
        raise PoolSourceError(f'Cannot read data from "{path}"') from exc


def parse_pool_text(text: str, *, rng: random.Random | None = None) -> AnswerPools:
    if text.startswith("\ufeff"):
        text = text[1:]
    if rng is None:
        rng = random.Random()

    priority: list[str] = []
    filler: list[str] = []
    active = priority

    for lineno, raw in enumerate(text.splitlines(), start=1):
        entry = classify_line(raw, lineno=lineno)
        if isinstance(entry, (Blank, Comment)):
            continue
        if isinstance(entry, Separator):
            active = filler
            continue
        if isinstance(entry, RangeDirective):
            active.extend(expand_range(entry))
        else:
            active.append(substitute(entry.text))

    rng.shuffle(priority)
    rng.shuffle(filler)
    logger.debug("Parsed %d priority and %d filler values", len(priority), len(filler))
    return AnswerPools(priority=priority, filler=filler)
