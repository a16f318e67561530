# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the '_ArrayCodec' module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import errno
import pytest
from cpufreqlibs import CPUFreqVars, _ArrayCodec
from cpufreqlibs.helperlibs.Exceptions import ErrorBadFormat, ErrorOutOfRange, ErrorNoData

def test_bufsizes():
    """Test the read buffer sizes."""

    assert _ArrayCodec.get_int_array_bufsize(1) == 14
    assert _ArrayCodec.get_int_array_bufsize(CPUFreqVars.MAX_CPUS) == 1024 * 13 + 1
    assert _ArrayCodec.get_token_array_bufsize(CPUFreqVars.MAX_GOVS) == 16 * 128

def test_capacity():
    """Test capacity validation."""

    for maxcnt in (1, 32, CPUFreqVars.MAX_CAPACITY):
        _ArrayCodec.validate_capacity(maxcnt)

    for maxcnt in (0, -1, CPUFreqVars.MAX_CAPACITY + 1, "1", None, True):
        with pytest.raises(ErrorOutOfRange):
            _ArrayCodec.validate_capacity(maxcnt) # type: ignore[arg-type]

def test_decode_int_array():
    """Test decoding valid integer arrays."""

    assert _ArrayCodec.decode_int_array(b"0\n", 1) == [0]
    assert _ArrayCodec.decode_int_array(b"0 1 2 3\n", 4) == [0, 1, 2, 3]
    assert _ArrayCodec.decode_int_array(b"0 1 2 3\n", 1024) == [0, 1, 2, 3]
    assert _ArrayCodec.decode_int_array(b"3500000 2800000 800000 \n", 32) == \
           [3500000, 2800000, 800000]
    assert _ArrayCodec.decode_int_array(b"1\t2  3\n", 3) == [1, 2, 3]
    assert _ArrayCodec.decode_int_array(b"\n", 3) == []

def test_decode_int_array_overflow():
    """Test that more values than the capacity are rejected, not truncated."""

    with pytest.raises(ErrorOutOfRange) as excinfo:
        _ArrayCodec.decode_int_array(b"0 1 2 3\n", 3)
    assert excinfo.value.errno == errno.ERANGE

    # The contents filled the entire read buffer without the terminating newline: the file has more
    # data than could be read.
    bufsize = _ArrayCodec.get_int_array_bufsize(1)
    with pytest.raises(ErrorOutOfRange):
        _ArrayCodec.decode_int_array(b"1 2 3 4 5 6 7 ", 1, bufsize=bufsize)

    # The same amount of data terminated by a newline is fine.
    assert _ArrayCodec.decode_int_array(b"4294967295\n", 1, bufsize=11) == [4294967295]

def test_decode_int_array_bad():
    """Test that a single malformed value fails the entire array."""

    with pytest.raises(ErrorBadFormat) as excinfo:
        _ArrayCodec.decode_int_array(b"0 1 x 3\n", 4, what="'related_cpus' of CPU 0")
    assert excinfo.value.errno == errno.EINVAL
    assert "'related_cpus' of CPU 0" in str(excinfo.value)

    with pytest.raises(ErrorBadFormat):
        _ArrayCodec.decode_int_array(b"0-3\n", 4)

    with pytest.raises(ErrorOutOfRange):
        _ArrayCodec.decode_int_array(b"0 4294967296\n", 4)

    with pytest.raises(ErrorNoData):
        _ArrayCodec.decode_int_array(b"", 4)

def test_decode_token_array():
    """Test decoding token arrays."""

    data = b"conservative ondemand userspace powersave performance \n"
    assert _ArrayCodec.decode_token_array(data, 16, 32) == \
           ["conservative", "ondemand", "userspace", "powersave", "performance"]

    assert _ArrayCodec.decode_token_array(b"performance powersave\n", 2, 32) == \
           ["performance", "powersave"]

    # Long tokens are truncated to the width.
    assert _ArrayCodec.decode_token_array(b"performance powersave\n", 2, 5) == ["perfo", "power"]

def test_decode_token_array_bad():
    """Test decoding bad token arrays."""

    with pytest.raises(ErrorOutOfRange):
        _ArrayCodec.decode_token_array(b"performance powersave\n", 1, 32)

    with pytest.raises(ErrorOutOfRange):
        _ArrayCodec.decode_token_array(b"performance powersave\n", 2, 0)

    with pytest.raises(ErrorNoData):
        _ArrayCodec.decode_token_array(b"", 2, 32)
