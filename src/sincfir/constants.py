#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Constants for the sincfir Package"""

import scipy

PI = scipy.constants.pi

# Boundary policies of the convolution
BOUNDARY_POLICIES = ("extend", "truncate", "periodic")
DEFAULT_BOUNDARY = "extend"

# Filter types and their aliases
FILTER_TYPES = ("lowpass", "highpass", "bandpass", "bandstop", "window")
FILTER_TYPE_ALIASES = {"bandreject" : "bandstop",
                       "notch" : "bandstop"}

# Filter types whose construction involves a spectral inversion
ODD_ORDER_FILTER_TYPES = ("highpass", "bandpass", "bandstop")

DEFAULT_WINDOW = "hamming"
