#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Synthetic test signals"""

import numpy as np
import tensorflow as tf
from sincfir import config, dtypes
from sincfir.constants import PI
from sincfir.errors import InvalidParameterError, SizeMismatchError

def _check_num_samples(num_samples):
    if isinstance(num_samples, bool) or \
            not isinstance(num_samples, (int, np.integer)) or num_samples < 1:
        msg = f"`num_samples` must be a positive integer, got {num_samples}"
        raise InvalidParameterError(msg)

def sum_of_sinusoids(num_samples,
                     frequencies,
                     amplitudes,
                     noise_std=0.,
                     precision=None):
    r"""Generates a sum of sinusoids

    .. math::
        x_n = \sum_k a_k \sin\left(\pi f_k t_n\right),\quad
        t_n = n - \frac{N-1}{2},\quad n=0,\dots,N-1

    The sampling times are symmetric about zero. As every sinusoid is an odd
    function of time, the signal has zero mean (up to round-off) for an odd
    number of samples `N`.

    Input
    -----
    num_samples : `int`
        Number of samples `N`

    frequencies : `list` of `float`
        Frequencies :math:`f_k` as a fraction of the Nyquist frequency

    amplitudes : `list` of `float`
        Amplitudes :math:`a_k`. Must have the same length as
        ``frequencies``.

    noise_std : `float`, (default 0)
        Standard deviation of additive white Gaussian noise drawn from
        :attr:`~sincfir.config.Config.tf_rng`

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    x : [N], `tf.float`
        Signal
    """
    _check_num_samples(num_samples)
    frequencies = np.atleast_1d(np.asarray(frequencies, np.float64))
    amplitudes = np.atleast_1d(np.asarray(amplitudes, np.float64))
    if frequencies.shape != amplitudes.shape:
        raise SizeMismatchError(
            "`frequencies` and `amplitudes` must have the same length")
    if noise_std < 0:
        raise InvalidParameterError("`noise_std` must be non-negative")
    if precision is None:
        precision = config.precision
    rdtype = dtypes[precision]["tf"]["rdtype"]

    t = tf.range(num_samples, dtype=rdtype) \
        - tf.constant((num_samples-1)/2, rdtype)
    f = tf.constant(PI*frequencies, rdtype)
    a = tf.constant(amplitudes, rdtype)
    x = tf.reduce_sum(a[:, tf.newaxis]*tf.sin(f[:, tf.newaxis]*t), axis=0)

    if noise_std > 0:
        x += config.tf_rng.normal([num_samples],
                                  stddev=tf.constant(noise_std, rdtype),
                                  dtype=rdtype)
    return x

def impulse(num_samples, position=None, precision=None):
    """Generates a unit impulse

    Input
    -----
    num_samples : `int`
        Number of samples `N`

    position : `None` (default) | `int`
        Index of the non-zero sample. Defaults to the center ``N//2``.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    x : [N], `tf.float`
        Unit impulse
    """
    _check_num_samples(num_samples)
    if position is None:
        position = num_samples//2
    if not 0 <= position < num_samples:
        msg = f"`position` must be in [0, {num_samples-1}], got {position}"
        raise InvalidParameterError(msg)
    if precision is None:
        precision = config.precision
    return tf.one_hot(position, num_samples,
                      dtype=dtypes[precision]["tf"]["rdtype"])
