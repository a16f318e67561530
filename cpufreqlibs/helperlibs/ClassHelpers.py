# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
Helpers for classes owning resources which have to be released: file descriptors and objects
holding them.
"""

from  __future__ import annotations # Remove when switching to Python 3.10+.

from typing import Any, Iterable
from cpufreqlibs.helperlibs import Logging

_LOG = Logging.getLogger(f"{Logging.MAIN_LOGGER_NAME}.cpufreq.{__name__}")

class SimpleCloseContext:
    """
    A base class turning a class with a 'close()' method into a context manager, which calls
    'close()' on exit.
    """

    def close(self):
        """Release the resources of the object. Supposed to be implemented by the subclass."""

    def __enter__(self):
        """Enter the runtime context."""
        return self

    def __exit__(self, *_: Any):
        """Exit the runtime context."""

        self.close()

def close(cls_obj: Any, close_attrs: Iterable[str] = (), unref_attrs: Iterable[str] = ()):
    """
    Release the objects referred to by the attributes of 'cls_obj'.

    Args:
        cls_obj: The object to release the attributes of.
        close_attrs: Names of the attributes referring to objects owned by 'cls_obj'. Call their
                     'close()' method and set the attributes to 'None'. An object is not closed
                     if 'cls_obj' has the '_close_<name>' attribute ('_close<name>' for names
                     starting with an underscore) set to 'False', this is how objects provided
                     by the user of 'cls_obj' are marked.
        unref_attrs: Names of the attributes referring to objects not owned by 'cls_obj'. Only set
                     the attributes to 'None'.
    """

    for attr in close_attrs:
        obj = getattr(cls_obj, attr, None)
        if obj is None:
            continue

        flag = f"_close{attr}" if attr.startswith("_") else f"_close_{attr}"
        if getattr(cls_obj, flag, True):
            if hasattr(obj, "close"):
                obj.close()
            else:
                _LOG.debug("BUG: no 'close()' method in '%s' referred to by '%s.%s'",
                           obj, type(cls_obj).__name__, attr)

        setattr(cls_obj, attr, None)

    for attr in unref_attrs:
        if hasattr(cls_obj, attr):
            setattr(cls_obj, attr, None)
