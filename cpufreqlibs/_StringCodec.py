# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Convert the contents of single-line text cpufreq sysfs files to and from strings.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import re
from cpufreqlibs.helperlibs.Exceptions import ErrorBadFormat, ErrorNoData

# The kernel terminates text attributes with a newline, zero bytes may come from fixed-size writes.
_TERMINATOR_REGEX = re.compile(b"[\n\0]")

def decode(data: bytes, what: str = "") -> str:
    """
    Decode the contents of a text cpufreq sysfs file: return the text preceding the first newline
    or zero byte.

    Args:
        data: The raw file contents.
        what: A short description of the value, for the possible error message.

    Returns:
        The decoded text.

    Raises:
        ErrorNoData: If 'data' is empty.
        ErrorBadFormat: If 'data' is not a UTF-8 text.
    """

    if not data:
        what = f" {what}" if what else ""
        raise ErrorNoData(f"No data for{what} value: read 0 bytes")

    text = _TERMINATOR_REGEX.split(data, 1)[0]
    try:
        return text.decode("utf-8")
    except UnicodeDecodeError as err:
        what = f" {what}" if what else ""
        raise ErrorBadFormat(f"Bad{what} value {text!r}: not a text:\n  {err}") from None

def encode(val: str | bytes, what: str = "") -> bytes:
    """
    Encode a string for writing to a cpufreq sysfs file. The value is written as is, sysfs does not
    require a terminating newline.

    Args:
        val: The value to encode.
        what: A short description of the value, for the possible error message.

    Returns:
        The encoded value.

    Raises:
        ErrorBadFormat: If 'val' is empty or not a string.
    """

    what = f" {what}" if what else ""

    if isinstance(val, str):
        data = val.encode("utf-8")
    elif isinstance(val, bytes):
        data = val
    else:
        raise ErrorBadFormat(f"Bad{what} value '{val}': should be a string")

    if not data:
        raise ErrorBadFormat(f"Bad{what} value: should not be empty")

    return data
