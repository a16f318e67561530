# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Test the YAML module.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

import io
from typing import Any, IO
from pathlib import Path
import pytest
from cpufreqlibs.helperlibs import YAML
from cpufreqlibs.helperlibs.Exceptions import Error

def _assert(fobj: IO[str], expected: str):
    """Verify that the contents of file object 'fobj' match the 'expected' string."""

    fobj.seek(0)
    assert fobj.read().strip() == expected.strip()

def test_yaml_dump(tmp_path: Path):
    """
    Test the YAML dump function.

    Args:
        tmp_path: A temporary directory path for testing (provided by the pytest framework).
    """

    yaml_dict: dict[Any, Any] = {0: {"scaling_driver": "acpi-cpufreq", "related_cpus": [0, 1]}}
    expected = "0:\n  scaling_driver: acpi-cpufreq\n  related_cpus:\n  - 0\n  - 1"

    fobj = io.StringIO()
    YAML.dump(yaml_dict, fobj)
    _assert(fobj, expected)

    # Test dumping to a file defined by a path.
    path = tmp_path / "test.yaml"
    YAML.dump(yaml_dict, path)
    with open(path, "r", encoding="utf-8") as file_obj:
        _assert(file_obj, expected)

    yaml_dict = {"scaling_cur_freq": 1500000, "bios_limit": None}

    fobj = io.StringIO()
    YAML.dump(yaml_dict, fobj)
    _assert(fobj, "scaling_cur_freq: 1500000\nbios_limit:")

    fobj = io.StringIO()
    YAML.dump({1: yaml_dict}, fobj, skip_none=True)
    _assert(fobj, "1:\n  scaling_cur_freq: 1500000")

def test_yaml_dump_error(tmp_path: Path):
    """Test dumping to a path that cannot be written."""

    with pytest.raises(Error):
        YAML.dump({"key": "value"}, tmp_path / "no" / "such" / "dir" / "test.yaml")
