"""
Built-in self-test.

A table of known inputs and outputs for every transform, and a runner that
checks them against the active configuration. Failures are logged and
collected into a report rather than raised, so a caller sees all of them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from strops.config import EmptySeparatorPolicy, StrOpsConfig, resolve_config
from strops.escape import escape, quote
from strops.replace import replace
from strops.split import join, split
from strops.trim import trim, trim_left, trim_right
from strops.units import CharWidth, UnitString

logger = logging.getLogger(__name__)


# =============================================================================
# Cases
# =============================================================================

# (raw, separator, expected fragment count)
SPLIT_JOIN_CASES = [
    ("", "|", 1),
    ("A", "|", 1),
    ("A|", "|", 2),
    ("A|B", "|", 2),
    ("A|B|C", "|", 3),
    ("A|B|C|", "|", 4),
    ("A", "<>", 1),
    ("A<>", "<>", 2),
    ("A<>B", "<>", 2),
    ("A<>B<>C", "<>", 3),
    ("A<>B<>C<>", "<>", 4),
    ("A>B>C", ">", 3),
    ("A>B>C>", ">", 4),
    ("ABC", ">", 1),
    ("T,E,S,T", ",", 4),
]

# Only meaningful for one empty-separator policy each.
EMPTY_SEPARATOR_CASES = {
    EmptySeparatorPolicy.PER_CHARACTER: [
        ("", "", 0),
        ("AB", "", 2),
        ("ABC", "", 3),
    ],
    EmptySeparatorPolicy.LITERAL: [
        ("", "", 1),
        ("AB", "", 1),
        ("ABC", "", 1),
    ],
}

# (raw, from, to, expected)
REPLACE_CASES = [
    ("", "TT", "MM", ""),
    ("A", "A", "BBB", "BBB"),
    ("A", "A", "BBBB", "BBBB"),
    ("123", "3", "34", "1234"),
    ("TESTTEST", "STT", "mmm", "TEmmmEST"),
    ("A", "", "X", "A"),
]

# (raw, cut-set, expected)
TRIM_CASES = [
    ("", "", ""),
    ("", " \t", ""),
    ("T T", "", "T T"),
    ("T T", " \t", "T T"),
    (" T T", " \t", "T T"),
    ("T T ", " \t", "T T"),
    (" T T ", " \t", "T T"),
    ("TAT", "T", "A"),
    ("TAXAT", "T", "AXA"),
    ("TEST", "TEST", ""),
    (" TEST ", "TEST", " TEST "),
    ("<TEST>", "<>", "TEST"),
]

TRIM_LEFT_CASES = [
    ("", "", ""),
    ("", " \t", ""),
    ("T T", "", "T T"),
    ("T T", " \t", "T T"),
    (" T T", " \t", "T T"),
    ("T T ", " \t", "T T "),
    (" T T ", " \t", "T T "),
    ("TAT", "T", "AT"),
    ("TEST", "TEST", ""),
    (" TEST ", "TEST", " TEST "),
    ("<TEST>", "<>", "TEST>"),
]

TRIM_RIGHT_CASES = [
    ("", "", ""),
    ("", " \t", ""),
    ("T T", "", "T T"),
    ("T T", " \t", "T T"),
    (" T T", " \t", " T T"),
    ("T T ", " \t", "T T"),
    (" T T ", " \t", " T T"),
    ("TAT", "T", "TA"),
    ("TEST", "TEST", ""),
    (" TEST ", "TEST", " TEST "),
    ("<TEST>", "<>", "<TEST"),
]

# (raw, expected) in narrow width
ESCAPE_CASES = [
    ("", ""),
    ("A", "A"),
    ("AB", "AB"),
    ("ABC", "ABC"),
    ("\n", "\\n"),
    ("\x01", "\\001"),
    ("ABC\n", "ABC\\n"),
    ("ABC\x01", "ABC\\001"),
    ("ABC\x01\x02", "ABC\\001\\002"),
]

# (width, raw, expected)
WIDE_ESCAPE_CASES = [
    (CharWidth.UTF16, "", ""),
    (CharWidth.UTF16, "A", "A"),
    (CharWidth.UTF16, "AB", "AB"),
    (CharWidth.UTF16, "ABC", "ABC"),
    (CharWidth.UTF16, "ABC\n", "ABC\\n"),
    (CharWidth.UTF16, "ABC\x01", "ABC\\u0001"),
    (CharWidth.UTF16, "ABC\x01\x02", "ABC\\u0001\\u0002"),
    (CharWidth.UTF32, "ABC\x01", "ABC\\U00000001"),
]

QUOTE_CASES = [
    ("\n", '"\\n"'),
    ("\x01", '"\\001"'),
]


# =============================================================================
# Report
# =============================================================================


@dataclass(frozen=True, slots=True)
class CaseFailure:
    """One case whose result differed from the expected value."""

    operation: str
    raw: Any
    result: Any
    expected: Any

    def __str__(self) -> str:
        return (
            f"{self.operation}: raw {self.raw!r}, "
            f"result {self.result!r}, expected {self.expected!r}"
        )

    def to_dict(self) -> dict[str, str]:
        return {
            "operation": self.operation,
            "raw": repr(self.raw),
            "result": repr(self.result),
            "expected": repr(self.expected),
        }


@dataclass
class SelfTestReport:
    """Outcome of ``run_self_test``."""

    total: int = 0
    failures: list[CaseFailure] = field(default_factory=list)

    @property
    def passed(self) -> int:
        return self.total - len(self.failures)

    @property
    def ok(self) -> bool:
        return not self.failures

    def check(self, operation: str, raw: Any, result: Any, expected: Any) -> bool:
        """Record one comparison and log it when it fails."""
        self.total += 1
        if result == expected:
            return True
        failure = CaseFailure(operation, raw, result, expected)
        self.failures.append(failure)
        logger.warning("%s", failure)
        return False

    def to_dict(self) -> dict[str, Any]:
        return {
            "total": self.total,
            "passed": self.passed,
            "failed": len(self.failures),
            "failures": [failure.to_dict() for failure in self.failures],
        }


# =============================================================================
# Runner
# =============================================================================


def _check_split_join(
    report: SelfTestReport, raw: str, sep: str, expected: int, config: StrOpsConfig
) -> None:
    fragments = split(raw, sep, config=config)
    if report.check(f"split {sep!r}", raw, len(fragments), expected):
        report.check(f"join {sep!r}", raw, join(fragments, sep), raw)


def _check_table(
    report: SelfTestReport,
    operation: str,
    func: Callable[..., Any],
    cases: list[tuple],
) -> None:
    for *args, expected in cases:
        report.check(operation, args[0], func(*args), expected)


def run_self_test(config: Optional[StrOpsConfig] = None) -> SelfTestReport:
    """
    Run every built-in case under ``config`` and return the report.

    Escape cases pin their width explicitly, so they hold whatever
    ``config.text_width`` is.
    """
    config = resolve_config(config)
    report = SelfTestReport()

    for raw, sep, expected in SPLIT_JOIN_CASES:
        _check_split_join(report, raw, sep, expected, config)
    for raw, sep, expected in EMPTY_SEPARATOR_CASES[config.empty_separator]:
        _check_split_join(report, raw, sep, expected, config)

    _check_table(report, "replace", replace, REPLACE_CASES)
    _check_table(report, "trim", trim, TRIM_CASES)
    _check_table(report, "trim_left", trim_left, TRIM_LEFT_CASES)
    _check_table(report, "trim_right", trim_right, TRIM_RIGHT_CASES)

    for raw, expected in ESCAPE_CASES:
        report.check(
            "escape",
            raw,
            escape(raw, width=CharWidth.NARROW, escape_non_ascii=False),
            expected,
        )
    for width, raw, expected in WIDE_ESCAPE_CASES:
        report.check(
            f"escape {width.name}",
            raw,
            escape(UnitString.from_text(raw, width), escape_non_ascii=False),
            UnitString.from_text(expected, width),
        )
    for raw, expected in QUOTE_CASES:
        report.check(
            "quote",
            raw,
            quote(raw, width=CharWidth.NARROW, escape_non_ascii=False),
            expected,
        )

    logger.debug("self-test: %d/%d passed", report.passed, report.total)
    return report
