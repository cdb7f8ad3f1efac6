#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Windowed-sinc FIR filter kernels and boundary-aware convolution"""

__version__ = "0.1.0"

from .errors import *
from .config import config, dtypes
from .constants import *
from .block import Object, Block
from . import signal
