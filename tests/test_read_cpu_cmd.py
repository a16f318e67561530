# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Test the 'cpufreq-read-cpu' tool.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import sys
import logging
from pathlib import Path
import pytest
import yaml
from common import run_read_cpu
from cpufreqtool import _CPUFreqReadCPU
from cpufreqlibs.helperlibs.Exceptions import Error, ErrorNotFound, ErrorNotSupported
from cpufreqlibs.helperlibs.Exceptions import ErrorBadFormat

_CPU0_OUTPUT = """affected_cpus: 0
bios_limit: not supported
cpuinfo_cur_freq: 1200000
cpuinfo_max_freq: 3500000
cpuinfo_min_freq: 800000
cpuinfo_transition_latency: 0
related_cpus: 0
scaling_available_frequencies: 3500000 2800000 2000000 1200000 800000
scaling_available_governors: conservative ondemand userspace powersave performance
scaling_cur_freq: 1500000
scaling_driver: acpi-cpufreq
scaling_governor: powersave
scaling_max_freq: 3500000
scaling_min_freq: 800000
"""

def test_default(sysfs_base: Path):
    """Test printing all attributes of the default CPU."""

    output = run_read_cpu(["--sysfs-base", str(sysfs_base)])
    assert output == _CPU0_OUTPUT

    # Re-using the file descriptors does not change the output.
    output = run_read_cpu(["--sysfs-base", str(sysfs_base), "--reuse-fds"])
    assert output == _CPU0_OUTPUT

def test_cpus(sysfs_base: Path):
    """Test the '--cpus' option."""

    output = run_read_cpu(["--sysfs-base", str(sysfs_base), "-c", "all"])
    lines = output.splitlines()
    assert lines[0] == "CPU 0:"
    assert "CPU 1:" in lines
    assert "affected_cpus: 1" in lines
    assert len(lines) == 2 * (len(_CPU0_OUTPUT.splitlines()) + 1)

    output = run_read_cpu(["--sysfs-base", str(sysfs_base), "--cpus", "1,0-1"])
    lines = output.splitlines()
    # The CPUs are printed in the specified order, without duplicates.
    assert lines[0] == "CPU 1:"
    assert lines[1] == "affected_cpus: 1"
    assert lines.count("CPU 0:") == 1
    assert len(lines) == 2 * (len(_CPU0_OUTPUT.splitlines()) + 1)

def test_attrs(sysfs_base: Path):
    """Test the '--attrs' option."""

    output = run_read_cpu(["--sysfs-base", str(sysfs_base), "-c", "1", "--attrs",
                           "scaling_driver,scaling_governor,related_cpus"])
    assert output == "scaling_driver: acpi-cpufreq\nscaling_governor: powersave\nrelated_cpus: 1\n"

    output = run_read_cpu(["--sysfs-base", str(sysfs_base), "--attrs", "bios_limit",
                           "--reuse-fds"])
    assert output == "bios_limit: not supported\n"

def test_yaml(sysfs_base: Path):
    """Test the YAML output."""

    output = run_read_cpu(["--sysfs-base", str(sysfs_base), "-c", "0-1", "--yaml"])
    ydict = yaml.safe_load(output)

    assert sorted(ydict) == [0, 1]
    assert ydict[1]["affected_cpus"] == [1]
    assert ydict[0]["scaling_available_frequencies"] == [3500000, 2800000, 2000000, 1200000,
                                                         800000]
    assert ydict[0]["scaling_governor"] == "powersave"
    assert ydict[0]["cpuinfo_transition_latency"] == 0
    assert "bios_limit" not in ydict[0]
    assert "scaling_setspeed" not in ydict[0]

def test_failed_attr(sysfs_base: Path, caplog: pytest.LogCaptureFixture):
    """Test that a failure to read an attribute is reported and the other attributes are printed."""

    with open(sysfs_base / "cpu0" / "cpufreq" / "scaling_cur_freq", "w", encoding="utf-8") as fobj:
        fobj.write("<unknown>\n")

    with caplog.at_level(logging.WARNING):
        output = run_read_cpu(["--sysfs-base", str(sysfs_base)])

    assert "scaling_cur_freq" not in output
    assert "scaling_driver: acpi-cpufreq" in output
    assert len(output.splitlines()) == len(_CPU0_OUTPUT.splitlines()) - 1
    assert any("scaling_cur_freq" in rec.getMessage() for rec in caplog.records)

def test_bad_options(sysfs_base: Path):
    """Test bad command-line options."""

    base = ["--sysfs-base", str(sysfs_base)]

    run_read_cpu(base + ["-c", "5"], exp_exc=ErrorNotFound)
    run_read_cpu(base + ["-c", "0,abc"], exp_exc=ErrorBadFormat)
    run_read_cpu(base + ["-c", "3-1"], exp_exc=ErrorBadFormat)
    run_read_cpu(base + ["-c", ","], exp_exc=Error)
    run_read_cpu(base + ["--attrs", "scaling_foo"], exp_exc=ErrorNotSupported)
    run_read_cpu(base + ["--attrs", "scaling_setspeed"], exp_exc=Error)
    run_read_cpu(base + ["--no-such-option"], exp_exc=Error)
    run_read_cpu(base + ["-q", "-d"], exp_exc=Error)

    # No CPU directories at all.
    run_read_cpu(["--sysfs-base", str(sysfs_base / "cpu0"), "-c", "all"], exp_exc=ErrorNotFound)

def test_main(sysfs_base: Path, monkeypatch: pytest.MonkeyPatch):
    """Test the tool entry point exit codes."""

    monkeypatch.setattr(sys, "argv", [_CPUFreqReadCPU.TOOLNAME, "--sysfs-base", str(sysfs_base),
                                      "--attrs", "scaling_driver"])
    assert _CPUFreqReadCPU.main() == 0

    monkeypatch.setattr(sys, "argv", [_CPUFreqReadCPU.TOOLNAME, "--sysfs-base", str(sysfs_base),
                                      "-c", "100"])
    with pytest.raises(SystemExit) as excinfo:
        _CPUFreqReadCPU.main()
    assert excinfo.value.code == 1
