#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Blocks and functions applying FIR filters"""

from collections.abc import Mapping
import tensorflow as tf
import matplotlib.pyplot as plt
import numpy as np
from sincfir import Block, dtypes, config
from sincfir.constants import DEFAULT_BOUNDARY
from sincfir.errors import InvalidParameterError, ParityError
from .kernel import firwin
from .spec import FilterSpec
from .utils import convolve, frequency_response, _as_tensor

class Filter(Block):
    # pylint: disable=line-too-long
    r"""
    Abtract class defining a FIR filter of ``length`` K which can be
    applied to an input ``x`` of length N

    The filter is applied through discrete convolution.
    The output has the same length as the input and its samples are aligned
    with those of the input, i.e., the input is centered on the filter
    coefficient with index ``(K-1)//2``.

    Three boundary policies are available for applying the filter:

    *   "extend" (default): Samples beyond the borders of ``x`` are equal to the nearest edge sample.
    *   "truncate": Samples beyond the borders of ``x`` are zero, i.e., the filter is cropped at the borders.
    *   "periodic": ``x`` wraps around at its borders.

    Parameters
    ----------
    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Input
    -----
    x : [...,N], `tf.complex` or `tf.float`
        Input to which the filter is applied along the last dimension

    boundary : "extend" (default) | "truncate" | "periodic"
        Boundary policy for convolving ``x`` and the filter

    Output
    ------
    y : [...,N], `tf.complex` or `tf.float`
        Filtered input
    """
    def __init__(self, precision=None, **kwargs):
        super().__init__(precision=precision, **kwargs)
        self._coefficients = None

    @property
    def coefficients(self):
        """
        [K], `tf.float` of `tf.complex` : Set/get filter coefficients
        """
        return self._coefficients

    @coefficients.setter
    def coefficients(self, v):
        self._coefficients = self._cast_to_precision(v)

    @property
    def length(self):
        """
        `int` : Filter length in samples
        """
        return self.coefficients.shape[0]

    @property
    def sample_indices(self):
        """
        [K], `numpy.int64` : Indices of the coefficients relative to the
            center coefficient
        """
        n_min = -((self.length-1)//2)
        return np.arange(n_min, n_min + self.length)

    def frequency_response(self, num_points=1024):
        """Frequency response of the filter

        See :func:`~sincfir.signal.frequency_response`.

        Input
        -----
        num_points : `int`, (default 1024)
            Number of frequencies, evenly spaced in :math:`[0,1]`

        Output
        ------
        freqs : [num_points], `tf.float`
            Frequencies as a fraction of the Nyquist frequency

        response : [num_points], `tf.complex`
            Frequency response
        """
        return frequency_response(self.coefficients, num_points,
                                  precision=self.precision)

    def show(self, response="impulse", scale="lin"):
        r"""Plot the impulse or magnitude response

        Plots the impulse response (time domain) or magnitude response
        (frequency domain) of the filter.

        Input
        -----
        response: "impulse" (default) | "magnitude"
            Desired response type

        scale: "lin" (default) | "db"
            y-scale of the magnitude response.
            Can be "lin" (i.e., linear) or "db" (, i.e., Decibel).
        """
        if response not in ["impulse", "magnitude"]:
            raise InvalidParameterError("Invalid response")

        h = self.coefficients

        if response=="impulse":
            plt.figure(figsize=(12,6))
            plt.plot(self.sample_indices, np.real(h))
            if h.dtype.is_complex:
                plt.plot(self.sample_indices, np.imag(h))
                plt.legend(["Real part", "Imaginary part"])
            plt.title("Impulse response")
            plt.grid()
            plt.xlabel(r"Sample index $n$")
            plt.ylabel(r"$h[n]$")
            plt.xlim(self.sample_indices[0], self.sample_indices[-1])

        else:
            if scale not in ["lin", "db"]:
                raise InvalidParameterError("Invalid scale")
            f, h = self.frequency_response()
            h = np.abs(h.numpy())
            plt.figure(figsize=(12,6))
            if scale=="db":
                h = np.maximum(h, 1e-10)
                h = 20*np.log10(h)
                plt.ylabel(r"$|H(f)|$ (dB)")
            else:
                plt.ylabel(r"$|H(f)|$")
            plt.plot(f, h)
            plt.title("Magnitude response")
            plt.grid()
            plt.xlabel(r"Normalized frequency $(f/f_\mathrm{Nyquist})$")
            plt.xlim(0, 1)

    def call(self, x, boundary=DEFAULT_BOUNDARY):
        return convolve(x, self.coefficients, boundary=boundary,
                        precision=self.precision)

class FIRFilter(Filter):
    # pylint: disable=line-too-long
    r"""
    Block for applying a windowed-sinc filter defined by a
    :class:`~sincfir.signal.FilterSpec`

    The coefficients are computed once by :func:`~sincfir.signal.firwin`.

    Parameters
    ----------
    spec : :class:`~sincfir.signal.FilterSpec` | `dict`
        Filter specification. The order must be defined.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Input
    -----
    x : [...,N], `tf.complex` or `tf.float`
        Input to which the filter is applied along the last dimension

    boundary : "extend" (default) | "truncate" | "periodic"
        Boundary policy for convolving ``x`` and the filter

    Output
    ------
    y : [...,N], `tf.complex` or `tf.float`
        Filtered input
    """
    def __init__(self, spec, precision=None, **kwargs):
        super().__init__(precision=precision, **kwargs)
        if isinstance(spec, Mapping):
            spec = FilterSpec.from_mapping(spec)
        elif not isinstance(spec, FilterSpec):
            raise InvalidParameterError(
                f"Invalid filter specification {spec!r}")
        self._spec = spec.clone()
        self.coefficients = firwin(self._spec, precision=self.precision)

    @property
    def spec(self):
        """
        :class:`~sincfir.signal.FilterSpec` : Copy of the filter
            specification
        """
        return self._spec.clone()

class LowpassFilter(FIRFilter):
    r"""
    Block for applying a windowed-sinc lowpass filter

    Parameters
    ----------
    order : `int`
        Number of coefficients

    fc : `float`
        Cutoff frequency as a fraction of the Nyquist frequency

    window : `None` (default) | `str` | `dict` | :class:`~sincfir.signal.Window`
        Window applied to the sinc response. `None` designates the
        Hamming window.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
    """
    def __init__(self, order, fc, window=None, precision=None, **kwargs):
        spec = FilterSpec("lowpass", order=order, fc=fc, window=window)
        super().__init__(spec, precision=precision, **kwargs)

class HighpassFilter(FIRFilter):
    r"""
    Block for applying a windowed-sinc highpass filter

    The filter is the spectral inverse of the lowpass filter with the
    same parameters.

    Parameters
    ----------
    order : `int`
        Number of coefficients. Must be odd.

    fc : `float`
        Cutoff frequency as a fraction of the Nyquist frequency

    window : `None` (default) | `str` | `dict` | :class:`~sincfir.signal.Window`
        Window applied to the sinc response

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
    """
    def __init__(self, order, fc, window=None, precision=None, **kwargs):
        spec = FilterSpec("highpass", order=order, fc=fc, window=window)
        super().__init__(spec, precision=precision, **kwargs)

class BandpassFilter(FIRFilter):
    r"""
    Block for applying a windowed-sinc bandpass filter

    Parameters
    ----------
    order : `int`
        Number of coefficients. Must be odd.

    fclo : `float`
        Lower cutoff frequency as a fraction of the Nyquist frequency

    fchi : `float`
        Upper cutoff frequency as a fraction of the Nyquist frequency

    window : `None` (default) | `str` | `dict` | :class:`~sincfir.signal.Window`
        Window applied to the sinc responses

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
    """
    def __init__(self, order, fclo, fchi, window=None, precision=None,
                 **kwargs):
        spec = FilterSpec("bandpass", order=order, fclo=fclo, fchi=fchi,
                          window=window)
        super().__init__(spec, precision=precision, **kwargs)

class BandstopFilter(FIRFilter):
    r"""
    Block for applying a windowed-sinc bandstop filter

    Its response is complementary to the one of the
    :class:`~sincfir.signal.BandpassFilter` with the same parameters.

    Parameters
    ----------
    order : `int`
        Number of coefficients. Must be odd.

    fclo : `float`
        Lower cutoff frequency as a fraction of the Nyquist frequency

    fchi : `float`
        Upper cutoff frequency as a fraction of the Nyquist frequency

    window : `None` (default) | `str` | `dict` | :class:`~sincfir.signal.Window`
        Window applied to the sinc responses

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
    """
    def __init__(self, order, fclo, fchi, window=None, precision=None,
                 **kwargs):
        spec = FilterSpec("bandstop", order=order, fclo=fclo, fchi=fchi,
                          window=window)
        super().__init__(spec, precision=precision, **kwargs)

class MovingAverageFilter(FIRFilter):
    r"""
    Block for applying a (weighted) moving average

    The coefficients are the window normalized to unit sum. The default
    rectangular window yields the plain moving average.

    Parameters
    ----------
    order : `int`
        Number of coefficients

    window : `str` | `dict` | :class:`~sincfir.signal.Window`, (default "rectangular")
        Weighting window

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
    """
    def __init__(self, order, window="rectangular", precision=None,
                 **kwargs):
        spec = FilterSpec("window", order=order, window=window)
        super().__init__(spec, precision=precision, **kwargs)

class CustomFilter(Filter):
    # pylint: disable=line-too-long
    r"""
    Block for applying a custom filter of ``length`` K
    to an input ``x`` of length N

    The `dtype` of the output is `tf.float` if both ``x`` and the filter coefficients have dtype `tf.float`.
    Otherwise, the dtype of the output is `tf.complex`.

    Parameters
    ----------
    coefficients: [K], `tf.float` or `tf.complex`
        Filter coefficients. The number of coefficients must be odd.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Input
    -----
    x : [...,N], `tf.complex` or `tf.float`
        Input to which the filter is applied along the last dimension

    boundary : "extend" (default) | "truncate" | "periodic"
        Boundary policy for convolving ``x`` and the filter

    Output
    ------
    y : [...,N], `tf.complex` or `tf.float`
        Filtered input
    """
    def __init__(self, coefficients, precision=None, **kwargs):
        super().__init__(precision=precision, **kwargs)

        self.coefficients = coefficients
        if self.coefficients.shape.rank != 1:
            raise InvalidParameterError("`coefficients` must be a vector")
        if self.length % 2 == 0:
            msg = f"The number of coefficients must be odd, got {self.length}"
            raise ParityError(msg)

def _resolve_order(order, spec_order, length):
    """Returns the first positive integer among ``order`` and
    ``spec_order``, and ``length`` if there is none"""
    for n in (order, spec_order):
        if isinstance(n, (int, np.integer)) and not isinstance(n, bool) \
                and n > 0:
            return int(n)
    return length

# pylint: disable=redefined-builtin
def filter(x,
           spec_or_kernel,
           boundary=DEFAULT_BOUNDARY,
           return_kernel=False,
           order=None,
           precision=None):
    # pylint: disable=line-too-long
    r"""
    Filters a signal with a FIR kernel

    The kernel is either given explicitly or built with
    :func:`~sincfir.signal.firwin` from a filter specification. The
    input is convolved with the kernel along its last dimension as
    described in :func:`~sincfir.signal.convolve`.

    Input
    -----
    x : [...,N], `tf.float` or `tf.complex`
        Signal to filter

    spec_or_kernel : :class:`~sincfir.signal.FilterSpec` | `dict` | :class:`~sincfir.signal.Filter` | [K], `tf.float` or `tf.complex`
        Filter specification, filter block, or kernel. A dictionary is
        passed as keyword arguments to :class:`~sincfir.signal.FilterSpec`.

    boundary : "extend" (default) | "truncate" | "periodic"
        Boundary policy

    return_kernel : `bool`, (default `False`)
        If `True`, the kernel is returned together with the filtered
        signal.

    order : `None` (default) | `int`
        Order of the kernel built from a specification. If `None` or not
        a positive integer, the order of the specification is used. If
        that is undefined as well, the order is the length `N` of ``x``.
        Ignored if ``spec_or_kernel`` is not a specification.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    y : [...,N], `tf.float` or `tf.complex`
        Filtered signal

    kernel : [K], `tf.float` or `tf.complex`
        Kernel applied to ``x``. Only returned if ``return_kernel`` is
        `True`.

    Example
    -------
    .. code-block:: Python

        from sincfir.signal import filter, sum_of_sinusoids

        x = sum_of_sinusoids(1001, [0.01, 0.1, 0.4], [1, 0.1, 0.05])
        y, kernel = filter(x, {"filter_type": "lowpass", "fc": 0.05},
                           return_kernel=True)
    """
    if not isinstance(return_kernel, bool):
        raise InvalidParameterError("`return_kernel` must be bool")
    if precision is None:
        precision = config.precision

    x = _as_tensor(x)
    if isinstance(spec_or_kernel, Mapping):
        spec_or_kernel = FilterSpec.from_mapping(spec_or_kernel)

    if isinstance(spec_or_kernel, FilterSpec):
        n = _resolve_order(order, spec_or_kernel.order, x.shape[-1])
        kernel = firwin(spec_or_kernel.clone(order=n), precision=precision)
    elif isinstance(spec_or_kernel, Filter):
        kernel = spec_or_kernel.coefficients
    else:
        kernel = _as_tensor(spec_or_kernel)

    if kernel.dtype.is_complex:
        kernel = tf.cast(kernel, dtypes[precision]["tf"]["cdtype"])
    else:
        kernel = tf.cast(kernel, dtypes[precision]["tf"]["rdtype"])

    y = convolve(x, kernel, boundary=boundary, precision=precision)
    if return_kernel:
        return y, kernel
    return y
