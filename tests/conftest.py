#!/usr/bin/env python
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2022-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
This configuration file adds the custom '--real-sysfs' option and the fixtures providing emulated
cpufreq sysfs files for the tests.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import tempfile
from pathlib import Path
from typing import Generator
import pytest
import common
from cpufreqlibs import CPUFreqVars
from cpufreqlibs.CPUFreq import CPUFreq
from cpufreqlibs.testlibs.EmulFDIO import EmulFDIO

def pytest_addoption(parser: pytest.Parser):
    """Add custom pytest options."""

    text = """In addition to the emulated sysfs files, run the read-only tests against the cpufreq
              sysfs files of the local system."""
    parser.addoption("--real-sysfs", dest="real_sysfs", action="store_true", help=text)

@pytest.fixture(name="real_sysfs")
def fixture_real_sysfs(request: pytest.FixtureRequest) -> Path:
    """
    Return the real cpufreq sysfs base directory. Skip the test if the '--real-sysfs' option was
    not specified or the local system does not support cpufreq.
    """

    if not request.config.getoption("real_sysfs"):
        pytest.skip("the '--real-sysfs' option was not specified")

    base = Path(CPUFreqVars.SYSFS_BASE)
    if not (base / "cpu0" / "cpufreq").is_dir():
        pytest.skip(f"no cpufreq support: '{base}/cpu0/cpufreq' does not exist")

    return base

@pytest.fixture(name="sysfs_base")
def fixture_sysfs_base() -> Generator[Path, None, None]:
    """
    Create a fake cpufreq sysfs tree with CPUs 0 and 1 and yield its base directory. The tree is
    created in a short temporary directory, because cpufreq sysfs file paths are length-limited.
    """

    with tempfile.TemporaryDirectory(prefix="cpufreq-") as tmpdir:
        base = Path(tmpdir)
        common.build_sysfs_tree(base)
        yield base

@pytest.fixture(name="emul_fdio")
def fixture_emul_fdio() -> EmulFDIO:
    """
    Return an 'EmulFDIO' object emulating the cpufreq sysfs files of CPUs 0 and 1 under the
    default sysfs base directory.
    """

    fdio = EmulFDIO()
    common.add_emul_files(fdio, Path(CPUFreqVars.SYSFS_BASE))
    return fdio

@pytest.fixture(name="cpufreq")
def fixture_cpufreq(sysfs_base: Path) -> Generator[CPUFreq, None, None]:
    """Yield a 'CPUFreq' object for the fake sysfs tree."""

    with CPUFreq(sysfs_base=sysfs_base) as cpufreq:
        yield cpufreq

@pytest.fixture(name="emul_cpufreq")
def fixture_emul_cpufreq(emul_fdio: EmulFDIO) -> Generator[CPUFreq, None, None]:
    """Yield a 'CPUFreq' object using the 'emul_fdio' emulated sysfs files."""

    with CPUFreq(fdio=emul_fdio) as cpufreq:
        yield cpufreq
