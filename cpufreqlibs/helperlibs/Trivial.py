# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Common trivial helpers, mostly for parsing command line option values.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import typing
from itertools import groupby
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorBadFormat

if typing.TYPE_CHECKING:
    from typing import Iterable, TypeVar

    _T = TypeVar("_T")

def str_to_int(snum: str | int, base: int = 0, what: str = "value") -> int:
    """
    Convert a string to an integer.

    Args:
        snum: The string to convert.
        base: Base of 'snum', auto-detected from the prefix (e.g., '0x') by default.
        what: Description of the value for the possible error message.

    Returns:
        The integer value.

    Raises:
        ErrorBadFormat: If 'snum' is not an integer.
    """

    if base == 1 or base < 0:
        raise Error(f"BUG: bad base {base}, should be 0 or in the [2, 36] range")

    try:
        return int(str(snum), base)
    except (ValueError, TypeError):
        kind = f"a base {base} integer" if base else "an integer"
        raise ErrorBadFormat(f"Bad {what} '{snum}': should be {kind}") from None

def list_dedup(elts: Iterable[_T]) -> list[_T]:
    """Return the elements of 'elts' without duplicates, preserving the order."""

    return list(dict.fromkeys(elts))

def split_csv_line(csv_line: str, sep: str = ",", dedup: bool = False) -> list[str]:
    """
    Split a line of separated values, e.g. "scaling_driver, scaling_governor". White spaces around
    the values and empty values are dropped.

    Args:
        csv_line: The line to split.
        sep: The separator.
        dedup: Remove duplicate values.

    Returns:
        The list of values.
    """

    vals = [val.strip() for val in csv_line.split(sep)]
    vals = [val for val in vals if val]

    if dedup:
        return list_dedup(vals)
    return vals

def split_csv_line_int(csv_line: str, sep: str = ",", dedup: bool = False,
                       what: str = "values") -> list[int]:
    """
    Split a line of separated base 10 integers and integer ranges, e.g., "0,2-4" results in
    '[0, 2, 3, 4]'.

    Args:
        csv_line: The line to split.
        sep: The separator.
        dedup: Remove duplicate values.
        what: Description of the values for the possible error message.

    Returns:
        The list of integers.

    Raises:
        ErrorBadFormat: If 'csv_line' contains something else than integers and ranges.
    """

    result: list[int] = []

    for val in split_csv_line(csv_line, sep=sep):
        if "-" not in val:
            result.append(str_to_int(val, base=10, what=what))
            continue

        bounds = val.split("-")
        if len(bounds) != 2 or not all(bounds):
            raise ErrorBadFormat(f"Bad {what} '{csv_line}': bad range '{val}', should be two "
                                 f"integers separated by '-'")

        start, end = (str_to_int(bound, base=10, what=what) for bound in bounds)
        if start > end:
            raise ErrorBadFormat(f"Bad {what} '{csv_line}': bad range '{val}', the first number "
                                 f"should not be greater than the second one")

        result += range(start, end + 1)

    if dedup:
        return list_dedup(result)
    return result

def rangify(numbers: Iterable[int]) -> str:
    """
    Format integers as a comma-separated list of ranges, e.g., '[0, 1, 2, 5, 7, 8]' results in
    "0-2,5,7,8". Only three or more consecutive numbers are formatted as a range.

    Args:
        numbers: The integers to format.

    Returns:
        The formatted string.
    """

    try:
        nums = sorted(int(num) for num in numbers)
    except (ValueError, TypeError) as err:
        raise Error(f"BUG: failed to format '{numbers}' as ranges: not integers") from err

    strs: list[str] = []
    for _, group in groupby(enumerate(nums), lambda pair: pair[1] - pair[0]):
        consecutive = [num for _, num in group]
        if len(consecutive) > 2:
            strs.append(f"{consecutive[0]}-{consecutive[-1]}")
        else:
            strs += [str(num) for num in consecutive]

    return ",".join(strs)
