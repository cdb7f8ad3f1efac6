#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
import pytest
import numpy as np
import tensorflow as tf
import sincfir
from sincfir import config, InvalidParameterError
from sincfir.config import Config

def test_singleton():
    assert Config() is config

def test_precision():
    config.precision = "single"
    assert config.tf_rdtype == tf.float32
    assert config.tf_cdtype == tf.complex64
    config.precision = "double"
    assert config.tf_rdtype == tf.float64
    assert config.tf_cdtype == tf.complex128
    with pytest.raises(InvalidParameterError):
        config.precision = "half"

def test_seed():
    """The same seed yields the same random numbers"""
    config.seed = 3
    assert config.seed == 3
    a_tf = config.tf_rng.normal([10])
    config.seed = 3
    b_tf = config.tf_rng.normal([10])
    assert np.array_equal(a_tf.numpy(), b_tf.numpy())
    config.seed = None
    assert config.seed is None
    c_tf = config.tf_rng.normal([10])
    assert not np.array_equal(a_tf.numpy(), c_tf.numpy())

def test_fft_threshold():
    config.fft_threshold = np.int32(16)
    assert config.fft_threshold == 16
    for value in [0, -4, 2.5, True, "64"]:
        with pytest.raises(InvalidParameterError):
            config.fft_threshold = value
    assert config.fft_threshold == 16

def test_block_precision():
    block = sincfir.signal.HannWindow(precision="single")
    assert block.rdtype == tf.float32
    assert block.cdtype == tf.complex64
    assert sincfir.signal.HannWindow().precision == config.precision
    with pytest.raises(InvalidParameterError):
        sincfir.signal.HannWindow(precision="quad")
