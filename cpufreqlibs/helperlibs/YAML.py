# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Write dictionaries in the YAML format.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from pathlib import Path
from typing import Any, IO
import yaml
from cpufreqlibs.helperlibs import Logging
from cpufreqlibs.helperlibs.Exceptions import Error

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq.{__name__}")

class _Dumper(yaml.SafeDumper):
    """A YAML dumper printing 'None' values as empty values instead of 'null'."""

def _represent_none(dumper: yaml.SafeDumper, _: None) -> yaml.ScalarNode:
    """Represent 'None' as an empty scalar."""

    return dumper.represent_scalar("tag:yaml.org,2002:null", "")

_Dumper.add_representer(type(None), _represent_none)

def _without_none(data: dict[Any, Any]) -> dict[Any, Any]:
    """Return a copy of 'data' with the 'None' values dropped, including nested dictionaries."""

    return {key: _without_none(val) if isinstance(val, dict) else val
            for key, val in data.items() if val is not None}

def dump(data: dict[Any, Any], path: Path | IO[str], skip_none: bool = False):
    """
    Write a dictionary in the YAML format. Keys are written in the dictionary order.

    Args:
        data: The dictionary to write.
        path: Path of the file to write to, or a file object.
        skip_none: Do not write keys with 'None' values.

    Raises:
        Error: If the file cannot be written.
    """

    if skip_none:
        data = _without_none(data)

    kwargs: dict[str, Any] = {"Dumper": _Dumper, "default_flow_style": False, "sort_keys": False}

    if hasattr(path, "write"):
        yaml.dump(data, path, **kwargs)
        _LOG.debug("wrote YAML data to '%s'", getattr(path, "name", path))
        return

    try:
        with open(path, "w", encoding="utf-8") as fobj:
            yaml.dump(data, fobj, **kwargs)
    except OSError as err:
        errmsg = Error(str(err)).indent(2)
        raise Error(f"Failed to write YAML file '{path}':\n{errmsg}", errno=err.errno) from err

    _LOG.debug("wrote YAML file '%s'", path)
