#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Global sincfir Configuration"""

import numpy as np
import tensorflow as tf
from .errors import InvalidParameterError

# Mapping from precision to dtypes
dtypes = {
    'single' : {
        'tf' : {
            'cdtype' : tf.complex64,
            'rdtype' : tf.float32
        }
    },
    'double' : {
        'tf' : {
            'cdtype' : tf.complex128,
            'rdtype' : tf.float64
        }
    }
}

class Config():
    """sincfir Configuration Class

    This singleton class is used to define global configuration variables
    and random number generators that can be accessed from all modules
    and functions. It is instantiated immediately and its properties can be
    accessed as :code:`sincfir.config.desired_property`.
    """

    # This object is a singleton
    _instance = None
    def __new__(cls):
        if cls._instance is None:
            instance = object.__new__(cls)
            cls._instance = instance
        return cls._instance

    def __init__(self):
        self._seed = None
        self._tf_rng = None
        self._precision = None
        self._fft_threshold = None

        # Set default properties
        self.precision = 'double'
        self.fft_threshold = 128

    @property
    def tf_rng(self):
        """
        `tf.random.Generator` : TensorFlow random number generator

        .. code-block:: python

            from sincfir import config
            config.seed = 42 # Set seed for deterministic results

            # Use generator instead of tf.random
            noise = config.tf_rng.normal([4])
        """
        if self._tf_rng  is None:
            self._tf_rng = tf.random.Generator.from_non_deterministic_state()
        return self._tf_rng

    @property
    def seed(self):
        """
        `None` (default) | `int` : Get/set seed for all random number generators

        All random number generators used internally by sincfir
        can be configured with a common seed to ensure reproducability
        of results. It defaults to `None` which implies that a random
        seed will be used and results are non-deterministic.
        """
        return self._seed

    @seed.setter
    def seed(self, seed):
        # Store seed
        if seed is not None:
            seed = int(seed)
        self._seed = seed

        #TensorFlow
        if seed is None:
            self._tf_rng = tf.random.Generator.from_non_deterministic_state()
        else:
            self.tf_rng.reset_from_seed(seed)

    @property
    def precision(self):
        """
        "single" | "double" (default) : Default precision used for all
        computations

        The "single" option represents real-valued floating-point numbers
        using 32 bits, whereas the "double" option uses 64 bits.
        Filter identities such as lowpass plus highpass reproducing the
        input only hold to round-off of the chosen precision.
        """
        return self._precision

    @precision.setter
    def precision(self, v):
        if v not in ["single", "double"]:
            raise InvalidParameterError(
                "Precision must be ``single`` or ``double``.")
        self._precision = v

    @property
    def fft_threshold(self):
        """
        `int` (default 128) : Kernel length above which convolutions are
        computed in the frequency domain instead of directly
        """
        return self._fft_threshold

    @fft_threshold.setter
    def fft_threshold(self, v):
        if isinstance(v, bool) or not isinstance(v, (int, np.integer)) \
                or v < 1:
            raise InvalidParameterError(
                "`fft_threshold` must be a positive integer.")
        self._fft_threshold = int(v)

    @property
    def tf_rdtype(self):
        """
        `tf.dtype` : Default TensorFlow dtype for real floating point numbers
        """
        return dtypes[self.precision]['tf']['rdtype']

    @property
    def tf_cdtype(self):
        """
        `tf.dtype` : Default TensorFlow dtype for complex floating point numbers
        """
        return dtypes[self.precision]['tf']['cdtype']

config = Config()
