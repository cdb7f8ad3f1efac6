#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Utility functions for the filter module"""

import logging
import numpy as np
import tensorflow as tf
from tensorflow.experimental.numpy import swapaxes
from sincfir import config, dtypes
from sincfir.constants import BOUNDARY_POLICIES, DEFAULT_BOUNDARY, PI
from sincfir.errors import InvalidParameterError, SizeMismatchError

def _as_tensor(v):
    """Converts an input to a tensor, keeping the precision of NumPy
    arrays and Python floats"""
    if isinstance(v, (tf.Tensor, tf.Variable)):
        return tf.convert_to_tensor(v)
    return tf.convert_to_tensor(np.asarray(v))

def _pad(inp, left, right, boundary):
    """Pads the last dimension of a 2D tensor according to the boundary
    policy"""
    if boundary == "truncate":
        return tf.pad(inp, [[0,0], [left,right]])
    if boundary == "extend":
        head = tf.repeat(inp[:, :1], left, axis=-1)
        tail = tf.repeat(inp[:, -1:], right, axis=-1)
    else: # 'periodic'
        inp_len = inp.shape[-1]
        head = inp[:, inp_len-left:]
        tail = inp[:, :right]
    return tf.concat([head, inp, tail], axis=-1)

def _convolve_direct(inp, ker):
    """Valid convolution of the rows of ``inp`` with ``ker`` using
    TensorFlow's convolution operator"""

    # Using Tensorflow convolution implementation, we need to manually flip
    # the kernel
    ker = tf.reverse(ker, axis=(0,))
    # Tensorflow convolution expects convolution kernels with input and
    # output dims
    ker = tf.reshape(ker, [-1, 1, 1])
    # Tensorflow convolution expects a channel dim for the convolution
    inp = tf.expand_dims(inp, axis=-1)

    # Extract the real and imaginary components of the input and kernel
    inp_real = tf.math.real(inp)
    ker_real = tf.math.real(ker)
    inp_imag = tf.math.imag(inp)
    ker_imag = tf.math.imag(ker)

    # Compute convolution
    # The output is complex-valued if the input or the kernel is.
    # Defaults to False, and set to True if required later
    complex_output = False
    out_1 = tf.nn.convolution(inp_real, ker_real, padding='VALID')
    if inp.dtype.is_complex:
        out_4 = tf.nn.convolution(inp_imag, ker_real, padding='VALID')
        complex_output = True
    else:
        out_4 = tf.zeros_like(out_1)
    if ker.dtype.is_complex:
        out_3 = tf.nn.convolution(inp_real, ker_imag, padding='VALID')
        complex_output = True
    else:
        out_3 = tf.zeros_like(out_1)
    if inp.dtype.is_complex and ker.dtype.is_complex:
        out_2 = tf.nn.convolution(inp_imag, ker_imag, padding='VALID')
    else:
        out_2 = tf.zeros_like(out_1)
    if complex_output:
        out = tf.complex(out_1 - out_2,
                        out_3 + out_4)
    else:
        out = out_1

    return tf.squeeze(out, axis=-1)

def _convolve_fft(inp, ker, cdtype):
    """Valid convolution of the rows of ``inp`` with ``ker`` computed in
    the frequency domain"""
    inp_len = inp.shape[-1]
    ker_len = ker.shape[0]
    complex_output = inp.dtype.is_complex or ker.dtype.is_complex

    # Zero-padding to the length of the full linear convolution prevents
    # circular wrap-around
    fft_size = int(2**np.ceil(np.log2(inp_len + ker_len - 1)))
    inp = tf.pad(tf.cast(inp, cdtype), [[0,0], [0,fft_size-inp_len]])
    ker = tf.pad(tf.cast(ker, cdtype), [[0,fft_size-ker_len]])
    out = tf.signal.ifft(tf.signal.fft(inp)*tf.signal.fft(ker))

    # Keep the samples where input and kernel fully overlap
    out = out[:, ker_len-1:inp_len]
    if not complex_output:
        out = tf.math.real(out)
    return out

def convolve(inp, ker, boundary=DEFAULT_BOUNDARY, axis=-1, method="auto",
             precision=None):
    # pylint: disable=line-too-long
    r"""
    Filters an input ``inp`` of length `N` by convolving it with a kernel ``ker`` of length `K`

    The output has the same length `N` as the input. Its samples are
    aligned with those of the input, i.e., the input is centered on the
    kernel coefficient with index ``(K-1)//2``:

    .. math::
        y_n = \sum_{k=0}^{K-1} h_k x_{n + \lfloor (K-1)/2 \rfloor - k}

    The length of the kernel ``ker`` must not be greater than the one of the input sequence ``inp``.

    The `dtype` of the output is `tf.float` only if both ``inp`` and ``ker`` are `tf.float`. It is `tf.complex` otherwise.

    Three boundary policies define the input samples :math:`x_n` for
    :math:`n<0` and :math:`n \geq N`:

    *   "extend" (default): The samples are equal to the nearest edge sample.
    *   "truncate": The samples are zero, i.e., the kernel is cropped at the borders.
    *   "periodic": The input wraps around, i.e., :math:`x_n = x_{n \bmod N}`.

    Input
    ------
    inp : [...,N], `tf.complex` or `tf.float`
        Input to filter

    ker : [K], `tf.complex` or `tf.float`
        Kernel of the convolution

    boundary : "extend" (default) | "truncate" | "periodic"
        Boundary policy

    axis : `int`, (default -1)
        Axis along which to perform the convolution

    method : "auto" (default) | "direct" | "fft"
        Computation method. "auto" convolves directly kernels with at most
        :attr:`~sincfir.config.Config.fft_threshold` coefficients
        and uses the FFT otherwise. All methods yield the same result
        up to round-off.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    -------
    out : [...,N], `tf.complex` or `tf.float`
        Convolution output
    """

    # We don't want to be sensitive to case
    if not isinstance(boundary, str) or \
            boundary.lower() not in BOUNDARY_POLICIES:
        msg = f"Invalid boundary policy '{boundary}'. " \
              f"Must be one of {', '.join(BOUNDARY_POLICIES)}"
        raise InvalidParameterError(msg)
    boundary = boundary.lower()
    if method not in ("auto", "direct", "fft"):
        raise InvalidParameterError(f"Invalid convolution method '{method}'")

    # Cast inputs
    if precision is None:
        rdtype = config.tf_rdtype
        cdtype = config.tf_cdtype
    else:
        rdtype = dtypes[precision]["tf"]["rdtype"]
        cdtype = dtypes[precision]["tf"]["cdtype"]

    inp = _as_tensor(inp)
    ker = _as_tensor(ker)
    if inp.dtype.is_complex:
        inp = tf.cast(inp, cdtype)
    else:
        inp = tf.cast(inp, rdtype)
    if ker.dtype.is_complex:
        ker = tf.cast(ker, cdtype)
    else:
        ker = tf.cast(ker, rdtype)

    if ker.shape.rank != 1:
        msg = f"The kernel must be one-dimensional, got shape {ker.shape}"
        raise InvalidParameterError(msg)

    # Ensure we process along the axis requested by the user
    inp = swapaxes(inp, axis, -1)

    inp_len = inp.shape[-1]
    ker_len = ker.shape[0]
    if ker_len > inp_len:
        msg = f"Kernel of length {ker_len} is longer than the input " \
              f"of length {inp_len}"
        raise SizeMismatchError(msg)

    # Reshape the input to a 2D tensor
    batch_shape = tf.shape(inp)[:-1]
    inp = tf.reshape(inp, [-1, inp_len])

    # Pad the input so that the valid convolution has length N and each
    # output sample is aligned with the corresponding input sample
    center = (ker_len-1)//2
    inp = _pad(inp, ker_len-1-center, center, boundary)

    if method == "auto":
        method = "direct" if ker_len <= config.fft_threshold else "fft"
    logging.debug("Convolving input of length %d with kernel of length %d "
                  "(boundary=%s, method=%s)", inp_len, ker_len, boundary,
                  method)
    if method == "direct":
        out = _convolve_direct(inp, ker)
    else:
        out = _convolve_fft(inp, ker, cdtype)

    # Reshape the output to the expected shape
    out = tf.reshape(out, tf.concat([batch_shape, [inp_len]], axis=-1))
    out = swapaxes(out, axis, -1)

    return out

def frequency_response(kernel, num_points=1024, precision=None):
    r"""Computes the frequency response of a kernel

    The response is evaluated relative to the center coefficient with
    index :math:`c=\lfloor (K-1)/2 \rfloor`,

    .. math::
        H(f) = \sum_{k=0}^{K-1} h_k e^{-j\pi f (k-c)},

    so that kernels which are symmetric about their center have a
    real-valued response.

    Input
    -----
    kernel : [K], `tf.float` or `tf.complex`
        Filter kernel

    num_points : `int`, (default 1024)
        Number of frequencies, evenly spaced in :math:`[0,1]`

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    freqs : [num_points], `tf.float`
        Frequencies as a fraction of the Nyquist frequency

    response : [num_points], `tf.complex`
        Frequency response
    """
    if isinstance(num_points, bool) or \
            not isinstance(num_points, (int, np.integer)) or num_points < 2:
        raise InvalidParameterError("`num_points` must be an integer >= 2")
    if precision is None:
        rdtype = config.tf_rdtype
        cdtype = config.tf_cdtype
    else:
        rdtype = dtypes[precision]["tf"]["rdtype"]
        cdtype = dtypes[precision]["tf"]["cdtype"]

    kernel = tf.cast(_as_tensor(kernel), cdtype)
    ker_len = kernel.shape[0]
    freqs = tf.linspace(tf.constant(0., rdtype), tf.constant(1., rdtype),
                        int(num_points))
    k = tf.range(ker_len, dtype=rdtype) - tf.constant((ker_len-1)//2, rdtype)
    phase = -tf.constant(PI, rdtype)*freqs[:, tf.newaxis]*k[tf.newaxis, :]
    basis = tf.exp(tf.complex(tf.zeros_like(phase), phase))
    response = tf.linalg.matvec(basis, kernel)
    return freqs, response
