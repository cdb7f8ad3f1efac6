#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Signal Module of sincfir"""

from .utils import convolve, frequency_response
from .window import Window, CustomWindow, RectangularWindow, HannWindow, \
                    HammingWindow, BlackmanWindow, BartlettWindow, \
                    KaiserWindow, GaussianWindow, resolve_window, window
from .spec import FilterSpec
from .kernel import ir_sinc, spectral_invert, spectral_reverse, firwin
from .filter import Filter, FIRFilter, LowpassFilter, HighpassFilter, \
                    BandpassFilter, BandstopFilter, MovingAverageFilter, \
                    CustomFilter, filter
from .sources import sum_of_sinusoids, impulse
