#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Construction of FIR filter kernels from windowed sinc functions"""

import logging
from collections.abc import Mapping
import numpy as np
import tensorflow as tf
from sincfir import config, dtypes
from sincfir.constants import PI
from sincfir.errors import InvalidParameterError, ParityError
from .spec import FilterSpec
from .window import window

def _to_kernel(kernel, precision):
    """Converts a kernel to a 1-D tensor of the requested precision"""
    if precision is None:
        precision = config.precision
    if not isinstance(kernel, (tf.Tensor, tf.Variable)):
        kernel = np.asarray(kernel)
    kernel = tf.convert_to_tensor(kernel)
    if kernel.dtype.is_complex:
        kernel = tf.cast(kernel, dtypes[precision]["tf"]["cdtype"])
    else:
        kernel = tf.cast(kernel, dtypes[precision]["tf"]["rdtype"])
    if kernel.shape.rank != 1:
        msg = f"A kernel must be one-dimensional, got shape {kernel.shape}"
        raise InvalidParameterError(msg)
    return kernel

def ir_sinc(f_cut, length, precision=None):
    r"""Returns a sinc impulse response with cutoff frequency ``f_cut``

    The `N` coefficients are

    .. math::
        h_i = \frac{\sin\left(\pi f_c x_i\right)}{\pi x_i},\quad
        x_i = i - \frac{N-1}{2},\quad i=0,\dots,N-1

    The coefficient with index :math:`\lfloor N/2 \rfloor` is set to the
    limit :math:`f_c` of the expression for :math:`x_i \to 0`. For even
    `N`, where no :math:`x_i` is zero, this coefficient is overwritten all
    the same.

    Input
    -----
    f_cut : `float`
        Cutoff frequency as a fraction of the Nyquist frequency.
        Must be in the interval :math:`(0,1)`.

    length : `int`
        Number of coefficients `N`

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    : [N], `tf.float`
        Sinc impulse response
    """
    if isinstance(f_cut, bool) or not isinstance(f_cut, (int, float,
                                                         np.integer,
                                                         np.floating)) \
            or not 0 < f_cut < 1:
        msg = f"`f_cut` must be in the interval (0,1), got {f_cut}"
        raise InvalidParameterError(msg)
    if isinstance(length, bool) or not isinstance(length, (int, np.integer)) \
            or length < 1:
        msg = f"`length` must be a positive integer, got {length}"
        raise InvalidParameterError(msg)

    if precision is None:
        precision = config.precision
    rdtype = dtypes[precision]["tf"]["rdtype"]

    length = int(length)
    mid = length//2
    c = tf.constant(PI*float(f_cut), rdtype)
    x = tf.range(length, dtype=rdtype) - tf.constant((length-1)/2, rdtype)

    # The middle sample is replaced by one to avoid evaluating 0/0
    is_mid = tf.equal(tf.range(length), mid)
    x = tf.where(is_mid, tf.ones_like(x), x)
    h = tf.sin(c*x)/(tf.constant(PI, rdtype)*x)
    h = tf.where(is_mid, tf.fill([length], tf.constant(f_cut, rdtype)), h)
    return h

def spectral_invert(kernel, precision=None):
    r"""Returns the spectral inverse of a kernel

    The frequency response of the returned kernel is :math:`1-H(f)`,
    where :math:`H(f)` is the frequency response of ``kernel``.
    It is obtained by negating all coefficients and adding one to the
    center coefficient. Applying the function twice returns the input
    up to round-off.

    Input
    -----
    kernel : [N], `tf.float` or `tf.complex`
        Kernel of odd length `N`

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    : [N], `tf.float` or `tf.complex`
        Inverted kernel
    """
    kernel = _to_kernel(kernel, precision)
    length = kernel.shape[0]
    if length % 2 == 0:
        raise ParityError(f"spectral_invert: length {length} is not odd")
    mid = (length-1)//2
    delta = tf.one_hot(mid, length, dtype=kernel.dtype)
    return delta - kernel

def spectral_reverse(kernel, precision=None):
    r"""Returns the spectral reverse of a kernel

    The frequency response of the returned kernel is the frequency response
    of ``kernel`` mirrored about half the Nyquist frequency. It is obtained
    by negating the coefficients with odd index. Applying the function
    twice returns the input.

    Input
    -----
    kernel : [N], `tf.float` or `tf.complex`
        Kernel

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    : [N], `tf.float` or `tf.complex`
        Reversed kernel
    """
    kernel = _to_kernel(kernel, precision)
    is_odd = tf.equal(tf.math.floormod(tf.range(kernel.shape[0]), 2), 1)
    return tf.where(is_odd, -kernel, kernel)

def firwin(spec=None, precision=None, **kwargs):
    # pylint: disable=line-too-long
    r"""Returns a FIR filter kernel built from windowed sinc functions

    With the sinc response :math:`s_{f}` of :func:`~sincfir.signal.ir_sinc`,
    the window :math:`w`, and the spectral inversion :math:`\mathcal{I}` of
    :func:`~sincfir.signal.spectral_invert`, the kernels are

    * "lowpass": :math:`s_{f_c} w`
    * "highpass": :math:`\mathcal{I}(s_{f_c} w)`
    * "bandpass": :math:`\mathcal{I}\left(s_{f_\text{lo}} w + \mathcal{I}(s_{f_\text{hi}} w)\right)`
    * "bandstop": :math:`s_{f_\text{lo}} w + \mathcal{I}(s_{f_\text{hi}} w)`
    * "window": :math:`w / \sum_n w_n`

    The bandstop kernel is the sum of a lowpass at :math:`f_\text{lo}` and
    a highpass at :math:`f_\text{hi}`. The bandpass kernel is its spectral
    inverse.

    Input
    -----
    spec : `None` (default) | :class:`~sincfir.signal.FilterSpec` | `dict`
        Filter specification. A dictionary is passed as keyword arguments
        to :class:`~sincfir.signal.FilterSpec`. If `None`, the
        specification is built from ``kwargs``.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    kwargs : dict
        Properties of :class:`~sincfir.signal.FilterSpec`, e.g.,
        ``firwin(filter_type="highpass", order=101, fc=0.2)``.
        Only allowed if ``spec`` is `None`.

    Output
    ------
    : [N], `tf.float`
        Filter kernel
    """
    if spec is None:
        spec = FilterSpec.from_mapping(kwargs)
    elif kwargs:
        raise InvalidParameterError(
            "Keyword arguments can only be used without `spec`")
    elif isinstance(spec, Mapping):
        spec = FilterSpec.from_mapping(spec)
    elif not isinstance(spec, FilterSpec):
        raise InvalidParameterError(f"Invalid filter specification {spec!r}")
    spec.check_config()

    logging.debug("Building %s kernel of order %d", spec.filter_type,
                  spec.order)

    n = spec.order
    win = window(spec.window, n, precision=precision)

    if spec.filter_type == "window":
        return win/tf.reduce_sum(win)
    if spec.filter_type == "lowpass":
        return ir_sinc(spec.fc, n, precision)*win
    if spec.filter_type == "highpass":
        return spectral_invert(ir_sinc(spec.fc, n, precision)*win, precision)

    # "bandpass" and "bandstop"
    fir1 = ir_sinc(spec.fclo, n, precision)*win
    fir2 = spectral_invert(ir_sinc(spec.fchi, n, precision)*win, precision)
    if spec.filter_type == "bandpass":
        return spectral_invert(fir1 + fir2, precision)
    return fir1 + fir2
