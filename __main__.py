#!/usr/bin/python3
#
# -*- coding: utf-8 -*-
# vim: ts=4 sw=4 tw=100 et ai si
#
# Copyright (C) 2020-2025 Intel Corporation
# SPDX-License-Identifier: BSD-3-Clause

"""
The main entry point for the 'cpufreq-read-cpu' tool when it is run as a zipapp archive (e.g.,
'python3 -m zipapp . -o cpufreq-read-cpu.pyz'). The tool has no data files, so nothing has to be
extracted from the archive.
"""

import sys
from cpufreqtool._CPUFreqReadCPU import main

if __name__ == "__main__":
    sys.exit(main())
