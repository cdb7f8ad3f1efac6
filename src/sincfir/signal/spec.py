#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Validated specification of windowed-sinc FIR filters"""

import copy
import numpy as np
from sincfir.constants import FILTER_TYPES, FILTER_TYPE_ALIASES, \
                              ODD_ORDER_FILTER_TYPES
from sincfir.errors import InvalidParameterError, ParityError, \
                           UnknownFilterTypeError
from .window import resolve_window

class FilterSpec():
    # pylint: disable=line-too-long
    r"""
    Specification of a windowed-sinc FIR filter kernel

    All properties are validated when they are set. The consistency of the
    complete specification, e.g., the presence of the cutoff frequencies
    required by the filter type, is verified by :meth:`check_config`
    which is called by :func:`~sincfir.signal.firwin`.

    Cutoff frequencies are expressed as a fraction of the Nyquist
    frequency and must lie in the open interval :math:`(0,1)`.

    Parameters
    ----------
    filter_type : "lowpass" (default) | "highpass" | "bandpass" | "bandstop" | "window"
        Filter type. "bandreject" and "notch" are aliases of "bandstop".
        The type "window" designates the normalized window itself, i.e.,
        a moving-average-style kernel.

    order : `None` (default) | `int`
        Number of coefficients `N` of the kernel. Must be odd for
        highpass, bandpass, and bandstop filters.
        Can be left undefined if the order is resolved when the filter is
        applied, see :func:`~sincfir.signal.filter`.

    fc : `None` (default) | `float`
        Cutoff frequency of lowpass and highpass filters

    fclo : `None` (default) | `float`
        Lower cutoff frequency of bandpass and bandstop filters

    fchi : `None` (default) | `float`
        Upper cutoff frequency of bandpass and bandstop filters

    window : `None` (default) | `str` | `dict` | (`str`, `dict`) | :class:`~sincfir.signal.Window`
        Window applied to the sinc response, see
        :func:`~sincfir.signal.resolve_window`. `None` designates the
        Hamming window.

    Example
    -------
    .. code-block:: Python

        from sincfir.signal import FilterSpec, firwin

        spec = FilterSpec(filter_type="bandpass", order=101,
                          fclo=0.05, fchi=0.15, window="blackman")
        kernel = firwin(spec)
    """
    _name = "Filter Specification"
    _fields = ("filter_type", "order", "fc", "fclo", "fchi", "window")

    def __init__(self,
                 filter_type="lowpass",
                 order=None,
                 fc=None,
                 fclo=None,
                 fchi=None,
                 window=None):
        self.filter_type = filter_type
        self.order = order
        self.fc = fc
        self.fclo = fclo
        self.fchi = fchi
        self.window = window

    @staticmethod
    def _check_frequency(name, value):
        if value is None:
            return None
        if isinstance(value, bool) or \
                not isinstance(value, (int, float, np.integer, np.floating)):
            raise InvalidParameterError(f"`{name}` must be a real number")
        if not 0 < value < 1:
            msg = f"`{name}` must be in the interval (0,1), got {value}"
            raise InvalidParameterError(msg)
        return float(value)

    #-----------------------------#
    #---Configurable parameters---#
    #-----------------------------#

    @property
    def filter_type(self):
        """
        "lowpass" | "highpass" | "bandpass" | "bandstop" | "window" :
            Filter type. Aliases are replaced by their canonical name.
        """
        return self._filter_type

    @filter_type.setter
    def filter_type(self, value):
        if not isinstance(value, str):
            raise UnknownFilterTypeError(value)
        value = FILTER_TYPE_ALIASES.get(value.lower(), value.lower())
        if value not in FILTER_TYPES:
            raise UnknownFilterTypeError(value)
        self._filter_type = value

    @property
    def order(self):
        """
        `None` | `int` : Number of coefficients of the kernel
        """
        return self._order

    @order.setter
    def order(self, value):
        if value is not None:
            if isinstance(value, bool) or \
                    not isinstance(value, (int, np.integer)):
                msg = f"`order` must be an integer, got {value!r}"
                raise InvalidParameterError(msg)
            if value < 1:
                msg = f"`order` must be positive, got {value}"
                raise InvalidParameterError(msg)
            value = int(value)
        self._order = value

    @property
    def fc(self):
        """
        `None` | `float` : Cutoff frequency of lowpass and highpass filters
        """
        return self._fc

    @fc.setter
    def fc(self, value):
        self._fc = self._check_frequency("fc", value)

    @property
    def fclo(self):
        """
        `None` | `float` : Lower cutoff frequency of bandpass and bandstop
            filters
        """
        return self._fclo

    @fclo.setter
    def fclo(self, value):
        self._fclo = self._check_frequency("fclo", value)

    @property
    def fchi(self):
        """
        `None` | `float` : Upper cutoff frequency of bandpass and bandstop
            filters
        """
        return self._fchi

    @fchi.setter
    def fchi(self, value):
        self._fchi = self._check_frequency("fchi", value)

    @property
    def window(self):
        """
        `None` | `str` | `dict` | (`str`, `dict`) | :class:`~sincfir.signal.Window` :
            Window specification
        """
        return self._window

    @window.setter
    def window(self, value):
        # Fails early on unknown window names
        resolve_window(value)
        self._window = value

    #-------------------#
    #---Class methods---#
    #-------------------#

    def clone(self, deep=True, **kwargs):
        """Returns a copy of the specification

        Input
        -----
        deep : `bool`, (default `True`)
            If `True`, a deep copy will be returned.

        kwargs : dict
            Properties to be replaced in the copy, e.g., ``order=101``
        """
        if deep:
            spec = copy.deepcopy(self)
        else:
            spec = copy.copy(self)
        for key, value in kwargs.items():
            if key not in self._fields:
                raise InvalidParameterError(f"Unknown property '{key}'")
            setattr(spec, key, value)
        return spec

    @classmethod
    def from_mapping(cls, properties):
        """Builds a specification from a mapping of property names to
        values

        Unknown property names raise
        :class:`~sincfir.InvalidParameterError`.
        """
        unknown = [key for key in properties if key not in cls._fields]
        if unknown:
            msg = f"Unknown properties {unknown}. " \
                  f"Valid properties: {', '.join(cls._fields)}"
            raise InvalidParameterError(msg)
        return cls(**properties)

    def check_config(self):
        """Test if the specification is complete and consistent"""
        if self.order is None:
            raise InvalidParameterError("`order` must be set")

        if self.filter_type in ("lowpass", "highpass"):
            if self.fc is None:
                msg = f"`fc` is required for {self.filter_type} filters"
                raise InvalidParameterError(msg)
        elif self.filter_type in ("bandpass", "bandstop"):
            if self.fclo is None or self.fchi is None:
                msg = "`fclo` and `fchi` are required for " \
                      f"{self.filter_type} filters"
                raise InvalidParameterError(msg)
            if self.fclo >= self.fchi:
                msg = f"`fclo` ({self.fclo}) must be smaller than " \
                      f"`fchi` ({self.fchi})"
                raise InvalidParameterError(msg)

        if self.filter_type in ODD_ORDER_FILTER_TYPES and self.order % 2 == 0:
            msg = f"{self.filter_type} filters require an odd order, " \
                  f"got {self.order}"
            raise ParityError(msg)

    def show(self):
        """Print all properties of the specification"""
        print(self._name)
        print("="*len(self._name))
        for a in self._fields:
            print(f"{a} : {getattr(self, a)}")
        print("\r")

    def __repr__(self):
        fields = ", ".join(f"{a}={getattr(self, a)!r}" for a in self._fields)
        return f"FilterSpec({fields})"
