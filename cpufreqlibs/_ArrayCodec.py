# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Decode the contents of cpufreq sysfs files containing white space separated values: integer arrays
(e.g., 'related_cpus') and token arrays (e.g., 'scaling_available_governors').

The caller specifies the capacity - the maximum count of values it is prepared to accept. Decoding
is all-or-nothing: if there are more values than the capacity, or a value is malformed, nothing is
returned and an exception is raised. A truncated array is never returned.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

from cpufreqlibs import CPUFreqVars, _ScalarCodec, _StringCodec
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorOutOfRange, ErrorNoData

def _fmt_what(what: str) -> str:
    """Format the 'what' description for an error message."""

    return f" {what}" if what else ""

def validate_capacity(maxcnt: int, what: str = ""):
    """
    Validate a caller-supplied capacity.

    Args:
        maxcnt: The capacity to validate.
        what: A short description of the value, for the possible error message.

    Raises:
        ErrorOutOfRange: If 'maxcnt' is not in the [1, MAX_CAPACITY] range.
    """

    if not isinstance(maxcnt, int) or isinstance(maxcnt, bool) or \
       maxcnt < 1 or maxcnt > CPUFreqVars.MAX_CAPACITY:
        raise ErrorOutOfRange(f"Bad capacity '{maxcnt}' for{_fmt_what(what)} values: should be an "
                              f"integer in the [1, {CPUFreqVars.MAX_CAPACITY}] range")

def get_int_array_bufsize(maxcnt: int) -> int:
    """
    Return the read buffer size for an integer array of capacity 'maxcnt': a maximum length value
    and a separator for every element, plus a spare byte.
    """

    validate_capacity(maxcnt)
    return maxcnt * (CPUFreqVars.U32_MAX_LEN + 1) + 1

def get_token_array_bufsize(maxcnt: int) -> int:
    """Return the read buffer size for a token array of capacity 'maxcnt'."""

    validate_capacity(maxcnt)
    return maxcnt * CPUFreqVars.GOVERNOR_NAME_MAX_LEN

def _split(text: str, maxcnt: int, what: str) -> list[str]:
    """
    Split 'text' on white spaces and check the tokens count against the capacity.

    Args:
        text: The text to split.
        maxcnt: The capacity.
        what: A short description of the values, for the possible error message.

    Returns:
        The list of tokens.

    Raises:
        ErrorOutOfRange: If there are more tokens than 'maxcnt'.
    """

    tokens = text.split()
    if len(tokens) > maxcnt:
        raise ErrorOutOfRange(f"Too many{_fmt_what(what)} values: found {len(tokens)}, but the "
                              f"capacity is {maxcnt}")
    return tokens

def decode_int_array(data: bytes, maxcnt: int, bufsize: int | None = None,
                     what: str = "") -> list[int]:
    """
    Decode white space separated unsigned 32-bit integers.

    Args:
        data: The raw file contents.
        maxcnt: The capacity - maximum count of integers to accept.
        bufsize: Size of the buffer 'data' was read to. If 'data' fills the entire buffer and does
                 not end with a newline, the contents is considered to be truncated. Defaults to
                 'get_int_array_bufsize(maxcnt)'.
        what: A short description of the values, for the possible error message.

    Returns:
        The list of integers, may contain less than 'maxcnt' elements.

    Raises:
        ErrorNoData: If 'data' is empty.
        ErrorOutOfRange: If there are more than 'maxcnt' integers.
        ErrorBadFormat: If one of the values is not a decimal unsigned 32-bit integer.
    """

    validate_capacity(maxcnt, what=what)
    if bufsize is None:
        bufsize = get_int_array_bufsize(maxcnt)

    if not data:
        raise ErrorNoData(f"No data for{_fmt_what(what)} values: read 0 bytes")

    if len(data) >= bufsize and not data.endswith(b"\n"):
        raise ErrorOutOfRange(f"Too many{_fmt_what(what)} values: the contents do not fit "
                              f"{bufsize} bytes buffer for {maxcnt} values")

    text = data.split(b"\0", 1)[0].decode("ascii", errors="replace")
    tokens = _split(text, maxcnt, what)

    try:
        return [_ScalarCodec.parse_token(token, what=what) for token in tokens]
    except Error as err:
        # The 'ErrorBadFormat' or 'ErrorOutOfRange' type is kept.
        raise type(err)(f"Bad{_fmt_what(what)} values '{text.strip()}':\n{err.indent(2)}",
                        errno=err.errno) from err

def decode_token_array(data: bytes, maxcnt: int, width: int, what: str = "") -> list[str]:
    """
    Decode white space separated tokens. Tokens longer than 'width' characters are truncated.

    Args:
        data: The raw file contents.
        maxcnt: The capacity - maximum count of tokens to accept.
        width: Maximum token length.
        what: A short description of the values, for the possible error message.

    Returns:
        The list of tokens, may contain less than 'maxcnt' elements.

    Raises:
        ErrorNoData: If 'data' is empty.
        ErrorOutOfRange: If there are more than 'maxcnt' tokens or 'width' is bad.
        ErrorBadFormat: If 'data' is not a UTF-8 text.
    """

    validate_capacity(maxcnt, what=what)
    if not isinstance(width, int) or isinstance(width, bool) or width < 1:
        raise ErrorOutOfRange(f"Bad width '{width}' for{_fmt_what(what)} values: should be a "
                              f"positive integer")

    text = _StringCodec.decode(data, what=what)
    return [token[:width] for token in _split(text, maxcnt, what)]
