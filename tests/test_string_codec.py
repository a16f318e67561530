# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the '_StringCodec' module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import errno
import pytest
from cpufreqlibs import _StringCodec
from cpufreqlibs.helperlibs.Exceptions import ErrorBadFormat, ErrorNoData

def test_decode():
    """Test decoding text attributes."""

    assert _StringCodec.decode(b"acpi-cpufreq\n") == "acpi-cpufreq"
    assert _StringCodec.decode(b"intel_pstate") == "intel_pstate"
    assert _StringCodec.decode(b"performance\0ce\n") == "performance"
    assert _StringCodec.decode(b"powersave\nperformance\n") == "powersave"
    assert _StringCodec.decode(b"\n") == ""

def test_decode_bad():
    """Test decoding empty and non-text contents."""

    with pytest.raises(ErrorNoData) as excinfo:
        _StringCodec.decode(b"", what="'scaling_driver' of CPU 0")
    assert excinfo.value.errno == errno.ENODATA
    assert "'scaling_driver' of CPU 0" in str(excinfo.value)

    with pytest.raises(ErrorBadFormat):
        _StringCodec.decode(b"\xff\xfe\n")

def test_encode():
    """Test encoding text values."""

    assert _StringCodec.encode("performance") == b"performance"
    assert _StringCodec.encode(b"powersave") == b"powersave"

    for val in ("", b"", None, 1):
        with pytest.raises(ErrorBadFormat):
            _StringCodec.encode(val) # type: ignore[arg-type]
