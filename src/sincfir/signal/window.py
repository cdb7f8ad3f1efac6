#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Blocks implementing windowing functions"""

from collections.abc import Mapping
import matplotlib.pyplot as plt
import numpy as np
import scipy.special
import tensorflow as tf
from sincfir import Block, config, dtypes
from sincfir.constants import DEFAULT_WINDOW, PI
from sincfir.errors import InvalidParameterError, SizeMismatchError

class Window(Block):
    # pylint: disable=line-too-long
    r"""
    Abtract class defining a window function

    The window function is applied through element-wise multiplication.
    Its coefficients are computed for the length of the last dimension of
    the first input, or explicitly through :meth:`generate`.

    The window function is real-valued, i.e., has `tf.float` as `dtype`.
    The `dtype` of the output is the same as the `dtype` of the input ``x`` to which the window function is applied.
    The window function and the input must have the same precision.

    Parameters
    ----------
    normalize: `bool`, (default `False`)
        If `True`, the window is normalized to have unit average power
        per coefficient.

    periodic: `bool`, (default `False`)
        If `False`, the window is symmetric, which is the form used for
        filter design. If `True`, the periodic form used for spectral
        analysis is computed, i.e., the symmetric window of length
        `N+1` with its last coefficient dropped.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Input
    -----
    x : [..., N], `tf.complex` or `tf.float`
        The input to which the window function is applied.
        The window function is applied along the last dimension.

    Output
    ------
    y : [...,N], `tf.complex` or `tf.float`
        Output of the windowing operation
    """

    def __init__(self,
                 normalize=False,
                 periodic=False,
                 precision=None,
                 **kwargs):
        super().__init__(precision=precision, **kwargs)

        if not isinstance(normalize, bool):
            raise InvalidParameterError("normalize must be bool")
        self._normalize = normalize

        if not isinstance(periodic, bool):
            raise InvalidParameterError("periodic must be bool")
        self._periodic = periodic

        self._coefficients = None

    @property
    def coefficients(self):
        """
        [N], `tf.float` : Set/get raw window coefficients
            (before normalization)
        """
        return self._coefficients

    @coefficients.setter
    def coefficients(self, v):
        self._coefficients = self._cast_to_precision(v)

    @property
    def length(self):
        """
        `int` : Window length in number of samples
        """
        return self.coefficients.shape[0]

    @property
    def normalize(self):
        """
        `bool` : If `True`, the window is normalized to have unit average
        power per coefficient.
        """
        return self._normalize

    @property
    def periodic(self):
        """
        `bool` : If `True`, the periodic form of the window is used
        """
        return self._periodic

    def _compute(self, n, m):
        """Window coefficients at sample indices ``n`` for the
        denominator ``m`` of the symmetric definition"""
        raise NotImplementedError("Subclasses must implement this method.")

    def taper(self, length):
        """Computes the window coefficients for a given length

        The coefficients are returned without being stored, so that the
        same window can be shared between kernels of different lengths.

        Input
        -----
        length : `int`
            Number of coefficients

        Output
        ------
        : [length], `tf.float`
            Raw window coefficients (before normalization)
        """
        if isinstance(length, bool) or not isinstance(length,
                                                      (int, np.integer)) \
                or length < 1:
            raise InvalidParameterError(
                f"Window length must be a positive integer, got {length}")
        length = int(length)
        if length == 1:
            coefficients = np.ones([1])
        else:
            m = length if self.periodic else length - 1
            coefficients = self._compute(np.arange(length, dtype=np.float64),
                                         float(m))
        return self._cast_to_precision(coefficients)

    def generate(self, length):
        """Computes the window coefficients as :meth:`taper` does and stores
        them as :attr:`coefficients`"""
        coefficients = self.taper(length)
        self.coefficients = coefficients
        self._built = True
        return coefficients

    def build(self, input_shape):
        self.generate(input_shape[-1])

    def show(self, domain="time", scale="lin"):
        r"""Plot the window in time or frequency domain

        For the computation of the Fourier transform, a minimum DFT size
        of 1024 is assumed which is obtained through zero padding of
        the window coefficients in the time domain.

        Input
        -----
        domain: "time" (default) | "frequency"
            Desired domain

        scale: "lin" (default) | "db"
            y-scale of the magnitude in the frequency domain.
            Can be "lin" (i.e., linear) or "db" (, i.e., Decibel).
        """
        if domain not in ["time", "frequency"]:
            raise InvalidParameterError("Invalid domain")
        # Normalize if requested
        w = self.coefficients
        if self.normalize:
            energy = tf.reduce_mean(tf.square(w))
            w = w / tf.cast(tf.sqrt(energy), w.dtype)

        # Sample indices centered on the middle coefficient
        n_min = -(self.length//2)
        n_max = n_min + self.length
        sample_indices = np.arange(n_min, n_max)
        #
        if domain=="time":
            plt.figure(figsize=(12,6))
            plt.plot(sample_indices, w.numpy())
            plt.title("Time domain")
            plt.grid()
            plt.xlabel(r"Sample index $n$")
            plt.ylabel(r"$w[n]$")
            plt.xlim(sample_indices[0], sample_indices[-1])
        else:
            if scale not in ["lin", "db"]:
                raise InvalidParameterError("Invalid scale")
            fft_size = max(1024, w.shape[-1])
            h = np.fft.fft(w.numpy(), fft_size)
            h = np.fft.fftshift(h)
            h = np.abs(h)
            plt.figure(figsize=(12,6))
            if scale=="db":
                h = np.maximum(h, 1e-10)
                h = 20*np.log10(h)
                plt.ylabel(r"$|W(f)|$ (dB)")
            else:
                plt.ylabel(r"$|W(f)|$")
            f = np.linspace(-1, 1, fft_size)
            plt.plot(f, h)
            plt.title("Frequency domain")
            plt.grid()
            plt.xlabel(r"Normalized frequency $(f/f_\mathrm{Nyquist})$")
            plt.xlim(f[0], f[-1])

    def call(self, x):
        w = self.coefficients
        if w.shape[0] != x.shape[-1]:
            msg = f"Window of length {w.shape[0]} cannot be applied to " \
                  f"an input of length {x.shape[-1]}"
            raise SizeMismatchError(msg)

        # Normalize if requested
        if self.normalize:
            energy = tf.reduce_mean(tf.square(w))
            w = w / tf.cast(tf.sqrt(energy), w.dtype)

        # Cast to correct dtype if necessary
        if x.dtype.is_complex:
            w = tf.complex(w, tf.zeros_like(w))

        # Apply window, broadcasting over the leading dimensions
        y = w*x

        return y

class CustomWindow(Window):
    # pylint: disable=line-too-long
    r"""
    Block for defining custom window function

    The window function is applied through element-wise multiplication.

    Parameters
    ----------
    coefficients: [N], `tf.float`
        Window coefficients

    normalize: `bool`, (default `False`)
        If `True`, the window is normalized to have unit average power
        per coefficient.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Input
    -----
    x : [..., N], `tf.complex` or `tf.float`
        Input to which the window function is applied.
        The window function is applied along the last dimension.
        The length of the last dimension ``N`` must be the same as the ``length`` of the window function.

    Output
    ------
    y : [...,N], `tf.complex` or `tf.float`
        Output of the windowing operation
    """

    def __init__(self,
                 coefficients,
                 normalize=False,
                 precision=None,
                 **kwargs):

        super().__init__(normalize=normalize,
                         precision=precision,
                         **kwargs)

        self.coefficients = coefficients
        self._built = True

    def taper(self, length):
        if length != self.length:
            msg = f"Custom window has {self.length} coefficients, " \
                  f"{length} were requested"
            raise SizeMismatchError(msg)
        return self.coefficients

    def generate(self, length):
        return self.taper(length)

    def build(self, input_shape):
        pass

class RectangularWindow(Window):
    r"""
    Block for defining a rectangular window function

    All coefficients are equal to one, so that applying the window
    leaves the input unchanged.
    """
    def _compute(self, n, m):
        return np.ones_like(n)

class HannWindow(Window):
    # pylint: disable=line-too-long
    r"""
    Block for defining a Hann window function

    The window function is applied through element-wise multiplication.

    The Hann window is defined by

    .. math::
        w_n = \sin^2 \left( \frac{\pi n}{M} \right), 0 \leq n \leq N-1

    where :math:`N` is the window length and :math:`M=N-1` for the
    symmetric and :math:`M=N` for the periodic window.

    Parameters
    ----------
    normalize: `bool`, (default `False`)
        If `True`, the window is normalized to have unit average power
        per coefficient.

    periodic: `bool`, (default `False`)
        If `True`, the periodic form of the window is used.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.
    """
    def _compute(self, n, m):
        return np.square(np.sin(PI*n/m))

class HammingWindow(Window):
    # pylint: disable=line-too-long
    r"""
    Block for defining a Hamming window function

    The window function is applied through element-wise multiplication.

    The Hamming window is defined by

    .. math::
        w_n = a_0 - (1-a_0) \cos \left( \frac{2 \pi n}{M} \right), 0 \leq n \leq N-1

    where :math:`N` is the window length, :math:`a_0 = \frac{25}{46}`,
    and :math:`M=N-1` for the symmetric and :math:`M=N` for the periodic
    window.

    This is the default window of :func:`~sincfir.signal.firwin`.

    Parameters
    ----------
    normalize: `bool`, (default `False`)
        If `True`, the window is normalized to have unit average power
        per coefficient.

    periodic: `bool`, (default `False`)
        If `True`, the periodic form of the window is used.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.
    """
    def _compute(self, n, m):
        a0 = 25./46.
        a1 = 1. - a0
        return a0 - a1*np.cos(2.*PI*n/m)

class BlackmanWindow(Window):
    # pylint: disable=line-too-long
    r"""
    Block for defining a Blackman window function

    The window function is applied through element-wise multiplication.

    The Blackman window is defined by

    .. math::
        w_n = a_0 - a_1 \cos \left( \frac{2 \pi n}{M} \right) + a_2 \cos \left( \frac{4 \pi n}{M} \right), 0 \leq n \leq N-1

    where :math:`N` is the window length, :math:`a_0 = \frac{7938}{18608}`, :math:`a_1 = \frac{9240}{18608}`, and :math:`a_2 = \frac{1430}{18608}`.
    :math:`M=N-1` for the symmetric and :math:`M=N` for the periodic window.

    Parameters
    ----------
    normalize: `bool`, (default `False`)
        If `True`, the window is normalized to have unit average power
        per coefficient.

    periodic: `bool`, (default `False`)
        If `True`, the periodic form of the window is used.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.
    """
    def _compute(self, n, m):
        a0 = 7938./18608.
        a1 = 9240./18608.
        a2 = 1430./18608.
        return a0 - a1*np.cos(2.*PI*n/m) + a2*np.cos(4.*PI*n/m)

class BartlettWindow(Window):
    r"""
    Block for defining a Bartlett (triangular) window function

    .. math::
        w_n = 1 - \left| \frac{2n}{M} - 1 \right|, 0 \leq n \leq N-1
    """
    def _compute(self, n, m):
        return 1. - np.abs(2.*n/m - 1.)

class KaiserWindow(Window):
    # pylint: disable=line-too-long
    r"""
    Block for defining a Kaiser window function

    The Kaiser window is defined by

    .. math::
        w_n = \frac{I_0\left(\beta \sqrt{1 - \left(\frac{2n}{M}-1\right)^2}\right)}{I_0(\beta)}, 0 \leq n \leq N-1

    where :math:`I_0` is the zeroth-order modified Bessel function of the
    first kind.

    Parameters
    ----------
    beta: `float`, (default 8.6)
        Shape parameter trading main-lobe width against side-lobe level.
        Must be non-negative.

    normalize: `bool`, (default `False`)
        If `True`, the window is normalized to have unit average power
        per coefficient.

    periodic: `bool`, (default `False`)
        If `True`, the periodic form of the window is used.

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.
    """
    def __init__(self, beta=8.6, **kwargs):
        super().__init__(**kwargs)
        if beta < 0:
            raise InvalidParameterError("beta must be non-negative")
        self._beta = float(beta)

    @property
    def beta(self):
        """
        `float` : Shape parameter
        """
        return self._beta

    def _compute(self, n, m):
        r = 2.*n/m - 1.
        arg = self.beta*np.sqrt(np.maximum(1. - np.square(r), 0.))
        return scipy.special.i0(arg)/scipy.special.i0(self.beta)

class GaussianWindow(Window):
    r"""
    Block for defining a Gaussian window function

    .. math::
        w_n = \exp\left(-\frac{1}{2}\left(\frac{2n/M - 1}{\sigma}\right)^2\right), 0 \leq n \leq N-1

    Parameters
    ----------
    sigma: `float`, (default 0.4)
        Standard deviation relative to half the window length.
        Must be positive.
    """
    def __init__(self, sigma=0.4, **kwargs):
        super().__init__(**kwargs)
        if sigma <= 0:
            raise InvalidParameterError("sigma must be positive")
        self._sigma = float(sigma)

    @property
    def sigma(self):
        """
        `float` : Relative standard deviation
        """
        return self._sigma

    def _compute(self, n, m):
        r = (2.*n/m - 1.)/self.sigma
        return np.exp(-0.5*np.square(r))

# Window names accepted by :func:`resolve_window`
WINDOWS = {
    "rectangular" : RectangularWindow,
    "rect" : RectangularWindow,
    "boxcar" : RectangularWindow,
    "hann" : HannWindow,
    "hanning" : HannWindow,
    "hamming" : HammingWindow,
    "blackman" : BlackmanWindow,
    "bartlett" : BartlettWindow,
    "triangular" : BartlettWindow,
    "kaiser" : KaiserWindow,
    "gaussian" : GaussianWindow,
}

def resolve_window(spec=None, precision=None):
    # pylint: disable=line-too-long
    r"""
    Returns the :class:`~sincfir.signal.Window` designated by a window
    specification

    Input
    -----
    spec : `None` (default) | `str` | `dict` | (`str`, `dict`) | :class:`~sincfir.signal.Window`
        Window specification. `None` designates the default Hamming window.
        A string is a window name. A dictionary ``{"name": ..., "params": {...}}``
        or a pair ``(name, params)`` designates a parameterized window, e.g.,
        ``{"name": "kaiser", "params": {"beta": 6.}}``.
        A :class:`~sincfir.signal.Window` instance is returned as is.

    precision : `None` (default) | "single" | "double"
        Precision of the created window.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    : :class:`~sincfir.signal.Window`
        Window instance
    """
    if isinstance(spec, Window):
        return spec

    if spec is None:
        name, params = DEFAULT_WINDOW, {}
    elif isinstance(spec, str):
        name, params = spec, {}
    elif isinstance(spec, Mapping):
        unknown = set(spec) - {"name", "params"}
        if "name" not in spec or unknown:
            msg = "A window specification mapping must have the keys " \
                  f"'name' and (optionally) 'params', got {sorted(spec)}"
            raise InvalidParameterError(msg)
        name, params = spec["name"], spec.get("params") or {}
    elif isinstance(spec, (tuple, list)) and len(spec) == 2:
        name, params = spec[0], spec[1] or {}
    else:
        raise InvalidParameterError(f"Invalid window specification {spec!r}")

    if not isinstance(name, str) or name.lower() not in WINDOWS:
        msg = f"Unknown window '{name}'. " \
              f"Available windows: {', '.join(sorted(WINDOWS))}"
        raise InvalidParameterError(msg)
    if not isinstance(params, Mapping):
        raise InvalidParameterError("Window parameters must be a mapping")

    try:
        return WINDOWS[name.lower()](precision=precision, **params)
    except TypeError as e:
        msg = f"Invalid parameters {dict(params)} for window '{name}'"
        raise InvalidParameterError(msg) from e

def window(spec, length, precision=None):
    r"""
    Returns the coefficients of a window

    Input
    -----
    spec : `None` | `str` | `dict` | (`str`, `dict`) | :class:`~sincfir.signal.Window`
        Window specification as accepted by
        :func:`~sincfir.signal.resolve_window`

    length : `int`
        Number of coefficients

    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`,
        :attr:`~sincfir.config.Config.precision` is used.

    Output
    ------
    : [length], `tf.float`
        Raw window coefficients
    """
    if precision is None:
        precision = config.precision
    # The window is not modified, it may be shared by the caller
    w = resolve_window(spec, precision=precision).taper(length)
    # A Window instance passed in may use another precision
    return tf.cast(w, dtypes[precision]["tf"]["rdtype"])
