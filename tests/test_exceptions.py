# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Tests for the 'Exceptions' module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import errno
from cpufreqlibs.helperlibs import Exceptions

def test_default_errno():
    """Test the default error codes of the exception types."""

    assert Exceptions.Error("msg").errno is None
    assert Exceptions.ErrorNotFound("msg").errno == errno.ENOENT
    assert Exceptions.ErrorNotSupported("msg").errno == errno.EINVAL
    assert Exceptions.ErrorPermissionDenied("msg").errno == errno.EACCES
    assert Exceptions.ErrorBadFormat("msg").errno == errno.EINVAL
    assert Exceptions.ErrorOutOfRange("msg").errno == errno.ERANGE
    assert Exceptions.ErrorNoData("msg").errno == errno.ENODATA

    # The OS error code overrides the default one.
    assert Exceptions.ErrorNotFound("msg", errno=errno.ENODEV).errno == errno.ENODEV

def test_message():
    """Test the exception message formatting."""

    err = Exceptions.Error("bad value %d of '%s'", 5, "scaling_max_freq")
    assert str(err) == "bad value 5 of 'scaling_max_freq'"

    err = Exceptions.Error("first line\nsecond line")
    assert err.indent(2) == "  First line\n  second line"
    assert err.indent("> ", capitalize=False) == "> first line\n> second line"
