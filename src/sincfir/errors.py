#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Exceptions raised by sincfir"""

class FilterDesignError(ValueError):
    """Base class of all errors raised for invalid filter inputs"""

class InvalidParameterError(FilterDesignError):
    """A parameter is outside of its admissible range or set"""

class ParityError(FilterDesignError):
    """A kernel or filter order must be odd but is not"""

class UnknownFilterTypeError(FilterDesignError):
    """The requested filter type is not recognized"""

    def __init__(self, filter_type):
        self.filter_type = filter_type
        super().__init__(f"Unknown filter type '{filter_type}'")

class SizeMismatchError(FilterDesignError):
    """Two sequences have incompatible lengths"""
