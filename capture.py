"""
Turn a line of text into a chart point or a reset signal.

A capture is configured once at startup from three raw values: the primary
regex, an optional reset regex and the capture mode token ("1", "-1", "12",
"21"). Bad values raise CaptureConfigError before anything else is started.
"""
from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

Point = Tuple[float, float]


class CaptureConfigError(ValueError):
    """Raised for an unusable regex or capture mode at startup."""


class CaptureArityError(ValueError):
    """Raised when a two-group mode is used with a regex lacking two groups."""


class CaptureMode(Enum):
    Y_FROM_FIRST_GROUP = "1"
    X_FROM_FIRST_GROUP = "-1"
    XY_FROM_TWO_GROUPS = "12"
    YX_FROM_TWO_GROUPS = "21"

    @classmethod
    def from_token(cls, token: str) -> "CaptureMode":
        try:
            return cls(token)
        except ValueError:
            raise CaptureConfigError(f"Error: parsing capture method. {token!r}") from None

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def needs_two_groups(self) -> bool:
        return self in (CaptureMode.XY_FROM_TWO_GROUPS, CaptureMode.YX_FROM_TWO_GROUPS)


_DESCRIPTIONS = {
    CaptureMode.Y_FROM_FIRST_GROUP: "Using first group as y and the number of lines that matched as x",
    CaptureMode.X_FROM_FIRST_GROUP: "Using first group as x and the number of lines that matched as y",
    CaptureMode.XY_FROM_TWO_GROUPS: "Using first group as x and second group as y",
    CaptureMode.YX_FROM_TWO_GROUPS: "Using first group as y and second group as x",
}


def _compile(expr: str, what: str) -> re.Pattern:
    try:
        return re.compile(expr)
    except re.error as e:
        raise CaptureConfigError(f"Could not read {what}: {expr!r} ({e})") from e


@dataclass(frozen=True)
class CaptureSpec:
    pattern: re.Pattern
    reset_pattern: Optional[re.Pattern]
    mode: CaptureMode

    @classmethod
    def parse(cls, regex: str, reset_regex: Optional[str] = None, capture: str = "1") -> "CaptureSpec":
        """Compile raw configuration values. Raises CaptureConfigError."""
        pattern = _compile(regex, "regex")
        reset = _compile(reset_regex, "reset regex") if reset_regex is not None else None
        return cls(pattern, reset, CaptureMode.from_token(capture))


def parse_number(text: Optional[str]) -> float:
    """Lenient float parse: missing or garbled text becomes 0.0.

    Only plain ASCII numbers count; `float()` would also take surrounding
    whitespace, digit separators ("1_000") and non-ASCII digits.
    """
    if text is None or not text.isascii() or "_" in text or text != text.strip():
        return 0.0
    try:
        return float(text)
    except ValueError:
        return 0.0


class CaptureEngine:
    def __init__(self, spec: CaptureSpec):
        self.spec = spec

    def capture(self, line: str, counter: float) -> Optional[Point]:
        """Return the (x, y) point for `line`, or None when the regex does not match.

        `counter` is the number of lines captured so far; single-group modes
        use it as the synthetic axis. Raises CaptureArityError if a two-group
        mode meets a regex that does not expose exactly two groups.
        """
        m = self.spec.pattern.search(line)
        if m is None:
            return None

        mode = self.spec.mode
        if mode.needs_two_groups:
            if self.spec.pattern.groups != 2:
                raise CaptureArityError(
                    "requested two groups but regex does not contain them "
                    f"(found {self.spec.pattern.groups})"
                )
            first = parse_number(m.group(1))
            second = parse_number(m.group(2))
            if mode is CaptureMode.XY_FROM_TWO_GROUPS:
                return first, second
            return second, first

        value = parse_number(m.group(1)) if self.spec.pattern.groups >= 1 else 0.0
        if mode is CaptureMode.Y_FROM_FIRST_GROUP:
            return counter, value
        return value, counter

    def is_reset(self, line: str) -> bool:
        reset = self.spec.reset_pattern
        return reset is not None and reset.search(line) is not None
