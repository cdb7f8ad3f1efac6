#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
"""Definition of sincfir Object and Block classes"""

from abc import ABC
from abc import abstractmethod
import tensorflow as tf
import numpy as np
from .config import config, dtypes
from .errors import InvalidParameterError

class Object(ABC):
    """Abstract class for sincfir objects with a fixed precision

    Parameters
    ----------
    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations.
        If set to `None`, the default
        :attr:`~sincfir.config.Config.precision` is used.
    """
    def __init__(self, precision=None):
        if precision is None:
            self._precision = config.precision
        elif precision in ['single', 'double']:
            self._precision = precision
        else:
            raise InvalidParameterError(
                "'precision' must be 'single' or 'double'")

    @property
    def precision(self):
        """
        `str`, "single" | "double" : Precision used for all compuations
        """
        return self._precision

    @property
    def cdtype(self):
        """
        `tf.complex` : Type for complex floating point numbers
        """
        return dtypes[self.precision]['tf']['cdtype']

    @property
    def rdtype(self):
        """
        `tf.float` : Type for real floating point numbers
        """
        return dtypes[self.precision]['tf']['rdtype']

    def _cast_to_precision(self, v):
        """Converts ``v`` to a tensor of the object's precision, keeping
        complex values complex"""
        v = tf.convert_to_tensor(v)
        if v.dtype.is_complex:
            return tf.cast(v, self.cdtype)
        return tf.cast(v, self.rdtype)

class Block(Object):
    """Abstract class for sincfir processing blocks

    Floating and complex inputs are cast to the block's precision.
    :meth:`build` is called once with the shapes of the first inputs
    before :meth:`call`.

    Parameters
    ----------
    precision : `None` (default) | "single" | "double"
        Precision used for internal calculations and outputs.
        If set to `None`, the default
        :attr:`~sincfir.config.Config.precision` is used.
    """
    def __init__(self, precision=None):
        super().__init__(precision=precision)
        self._built = False

    def build(self, *arg_shapes, **kwarg_shapes):
        """
        Method to (optionally) initialize the block based on the inputs' shapes
        """
        pass

    @abstractmethod
    def call(self, *args, **kwargs):
        """
        Abstract call method with arbitrary arguments and keyword
        arguments
        """
        raise NotImplementedError("Subclasses must implement this method.")

    def _convert_to_tensor(self, v):
        if isinstance(v, np.ndarray):
            v = tf.convert_to_tensor(v)
        if isinstance(v, tf.Tensor) and \
                (v.dtype.is_floating or v.dtype.is_complex):
            v = self._cast_to_precision(v)
        return v

    def _get_shape(self, v):
        if hasattr(v, "shape"):
            return tf.TensorShape(v.shape)
        return tf.TensorShape([])

    def __call__(self, *args, **kwargs):
        args, kwargs = tf.nest.map_structure(self._convert_to_tensor,
                                             [args, kwargs])
        if not self._built:
            shapes = tf.nest.map_structure(self._get_shape, [args, kwargs])
            self.build(*shapes[0], **shapes[1])
            self._built = True
        return self.call(*args, **kwargs)
