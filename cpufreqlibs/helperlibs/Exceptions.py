# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
The exception types of the project.

All exceptions have the 'errno' attribute, the POSIX error code of the failure. Each exception type
has a default error code, and the 'errno' keyword argument overrides it, which is how the error code
of a failed system call reaches the caller.
"""

from __future__ import annotations # Remove when switching to Python 3.10+.

import errno as _errno
from typing import Any

class Error(Exception):
    """The base class of the project exceptions."""

    # The error code used when the 'errno' argument is not provided.
    default_errno: int | None = None

    def __init__(self, msg: Any, *args: Any, errno: int | None = None, **kwargs: Any):
        """
        Initialize a class instance.

        Args:
            msg: The error message, may be a format string.
            *args: The message format string arguments.
            errno: The POSIX error code, the 'default_errno' of the class by default.
            **kwargs: Extra information about the error, stored as the exception attributes.
        """

        self.msg = str(msg) % args if args else str(msg)
        super().__init__(self.msg)

        self.errno = self.default_errno if errno is None else errno

        for key, val in kwargs.items():
            setattr(self, key, val)

    def indent(self, indent: int | str, capitalize: bool = True) -> str:
        """
        Return the error message with every line prefixed.

        Args:
            indent: The prefix, or the count of spaces to use as the prefix.
            capitalize: Capitalize the first letter of the message.

        Returns:
            The prefixed error message.
        """

        pfx = " " * indent if isinstance(indent, int) else indent

        msg = self.msg
        if capitalize:
            msg = msg[:1].upper() + msg[1:]

        return "\n".join(pfx + line for line in msg.split("\n"))

    def __str__(self) -> str:
        """Return the error message."""
        return self.msg

class ErrorNotFound(Error):
    """Something does not exist, for example a file or a CPU."""

    default_errno = _errno.ENOENT

class ErrorNotSupported(Error):
    """An attribute, an option or an operation is not supported."""

    default_errno = _errno.EINVAL

class ErrorPermissionDenied(Error):
    """No permissions to access something."""

    default_errno = _errno.EACCES

class ErrorBadFormat(Error):
    """Something has an unexpected format, for example file contents or an option value."""

    default_errno = _errno.EINVAL

class ErrorOutOfRange(Error):
    """A value does not fit into the allowed range, for example too many values for a buffer."""

    default_errno = _errno.ERANGE

class ErrorNoData(Error):
    """Nothing was read where data was expected."""

    default_errno = _errno.ENODATA
