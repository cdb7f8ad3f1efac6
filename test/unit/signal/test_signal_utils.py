#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
import pytest
import numpy as np
import tensorflow as tf
from sincfir import config, dtypes, InvalidParameterError, SizeMismatchError
from sincfir.signal import convolve, frequency_response

NP_PAD_MODES = {"extend" : "edge", "truncate" : "constant",
                "periodic" : "wrap"}

def convolve_ref(x, h, boundary):
    """Same-size convolution with NumPy"""
    ker_len = len(h)
    center = (ker_len-1)//2
    x = np.pad(x, (ker_len-1-center, center), mode=NP_PAD_MODES[boundary])
    return np.convolve(x, h, mode="valid")

def random_tensor(shape, dtype):
    if dtype.is_complex:
        return tf.complex(config.tf_rng.normal(shape, dtype=dtype.real_dtype),
                          config.tf_rng.normal(shape, dtype=dtype.real_dtype))
    return config.tf_rng.normal(shape, dtype=dtype)

@pytest.mark.parametrize("inp_dtype", [tf.float32, tf.complex64])
@pytest.mark.parametrize("ker_dtype", [tf.float32, tf.complex64])
@pytest.mark.parametrize("precision", ["single", "double"])
def test_dtype(inp_dtype, ker_dtype, precision):
    """Test the output dtype for all possible combinations of
    input and kernel dtypes"""
    inp = random_tensor([16, 100], inp_dtype)
    ker = random_tensor([11], ker_dtype)
    if inp_dtype.is_complex or ker_dtype.is_complex:
        out_dtype = dtypes[precision]["tf"]["cdtype"]
    else:
        out_dtype = dtypes[precision]["tf"]["rdtype"]
    for method in ("direct", "fft"):
        out = convolve(inp, ker, method=method, precision=precision)
        assert out.dtype == out_dtype

@pytest.mark.parametrize("inp_dtype", [tf.float64, tf.complex128])
@pytest.mark.parametrize("ker_dtype", [tf.float64, tf.complex128])
@pytest.mark.parametrize("boundary", ["extend", "truncate", "periodic"])
@pytest.mark.parametrize("ker_len", [1, 2, 7, 8, 100])
@pytest.mark.parametrize("method", ["direct", "fft"])
def test_computation(inp_dtype, ker_dtype, boundary, ker_len, method):
    "Test the calculation against NumPy"
    inp = random_tensor([100], inp_dtype)
    ker = random_tensor([ker_len], ker_dtype)
    out = convolve(inp, ker, boundary=boundary, method=method)
    out_ref = convolve_ref(inp.numpy(), ker.numpy(), boundary)
    assert out.shape == [100]
    assert np.max(np.abs(out.numpy() - out_ref)) < 1e-10

@pytest.mark.parametrize("boundary", ["extend", "truncate", "periodic"])
def test_methods_equivalent(boundary):
    inp = random_tensor([4, 1000], tf.float64)
    ker = random_tensor([301], tf.float64)
    out_direct = convolve(inp, ker, boundary=boundary, method="direct")
    out_fft = convolve(inp, ker, boundary=boundary, method="fft")
    assert np.max(np.abs(out_direct.numpy() - out_fft.numpy())) < 1e-10

def test_auto_method_threshold():
    inp = random_tensor([200], tf.float64)
    ker = random_tensor([21], tf.float64)
    out_direct = convolve(inp, ker)
    config.fft_threshold = 4
    out_fft = convolve(inp, ker)
    assert np.max(np.abs(out_direct.numpy() - out_fft.numpy())) < 1e-12

def test_shape():
    """Test the output shape and the axis argument"""
    input_shape = [4, 8, 3, 50]
    inp = random_tensor(input_shape, tf.float64)
    ker = random_tensor([9], tf.float64)
    out = convolve(inp, ker)
    assert out.shape == input_shape
    out_ref = convolve_ref(inp.numpy()[1, 2, 0], ker.numpy(), "extend")
    assert np.max(np.abs(out.numpy()[1, 2, 0] - out_ref)) < 1e-10

    inp_t = tf.transpose(inp, [0, 3, 2, 1])
    out_t = convolve(inp_t, ker, axis=1)
    assert out_t.shape == inp_t.shape
    assert np.max(np.abs(tf.transpose(out_t, [0, 3, 2, 1]).numpy()
                         - out.numpy())) < 1e-12

def test_identity_kernel():
    inp = random_tensor([37], tf.float64)
    for boundary in ("extend", "truncate", "periodic"):
        out = convolve(inp, [0., 0., 1., 0., 0.], boundary=boundary)
        assert np.max(np.abs(out.numpy() - inp.numpy())) < 1e-15

def test_boundary_policies():
    """Test the samples assumed beyond the borders"""
    x = np.array([1., 2., 3., 4.])
    # Kernel shifting the input by one sample to the right
    ker = np.array([0., 0., 1.])
    assert np.allclose(convolve(x, ker, "extend"), [1., 1., 2., 3.])
    assert np.allclose(convolve(x, ker, "truncate"), [0., 1., 2., 3.])
    assert np.allclose(convolve(x, ker, "periodic"), [4., 1., 2., 3.])
    # And to the left
    ker = ker[::-1]
    assert np.allclose(convolve(x, ker, "extend"), [2., 3., 4., 4.])
    assert np.allclose(convolve(x, ker, "truncate"), [2., 3., 4., 0.])
    assert np.allclose(convolve(x, ker, "PERIODIC"), [2., 3., 4., 1.])

def test_extend_preserves_constant():
    """A kernel with unit sum keeps a constant signal constant, also at
    the borders"""
    x = 3.*np.ones([50])
    ker = np.ones([15])/15.
    out = convolve(x, ker, "extend").numpy()
    assert np.max(np.abs(out - 3.)) < 1e-14
    out = convolve(x, ker, "truncate").numpy()
    assert out[0] < 3. and out[-1] < 3.
    assert np.abs(out[25] - 3.) < 1e-14

def test_kernel_as_long_as_input():
    x = random_tensor([9], tf.float64)
    ker = random_tensor([9], tf.float64)
    out = convolve(x, ker, "periodic")
    assert np.max(np.abs(out.numpy() - convolve_ref(x.numpy(), ker.numpy(),
                                                    "periodic"))) < 1e-12

def test_kernel_longer_than_input():
    with pytest.raises(SizeMismatchError):
        convolve(np.ones([10]), np.ones([11]))

def test_invalid_arguments():
    x = np.ones([10])
    with pytest.raises(InvalidParameterError):
        convolve(x, np.ones([3]), boundary="reflect")
    with pytest.raises(InvalidParameterError):
        convolve(x, np.ones([3]), boundary=None)
    with pytest.raises(InvalidParameterError):
        convolve(x, np.ones([3]), method="overlap-add")
    with pytest.raises(InvalidParameterError):
        convolve(x, np.ones([3, 3]))

def test_input_not_mutated():
    x = np.arange(10.)
    x_copy = x.copy()
    convolve(x, np.ones([3])/3, "periodic")
    assert np.array_equal(x, x_copy)

def test_frequency_response():
    freqs, h = frequency_response([0., 0., 1., 0., 0.], 11)
    assert freqs.shape == [11]
    assert freqs.numpy()[0] == 0.
    assert np.abs(freqs.numpy()[-1] - 1.) < 1e-15
    assert np.max(np.abs(h.numpy() - 1.)) < 1e-15

    # Three-point moving average
    freqs, h = frequency_response(np.ones([3])/3, 5)
    ref = (1 + 2*np.cos(np.pi*freqs.numpy()))/3
    assert np.max(np.abs(h.numpy() - ref)) < 1e-14

    with pytest.raises(InvalidParameterError):
        frequency_response(np.ones([3]), 1)
