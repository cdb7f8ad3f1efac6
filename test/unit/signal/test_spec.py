#
# SPDX-FileCopyrightText: Copyright (c) 2021-2025 NVIDIA CORPORATION & AFFILIATES. All rights reserved.
# SPDX-License-Identifier: Apache-2.0#
import unittest
import numpy as np
from sincfir import FilterDesignError, InvalidParameterError, ParityError, \
                    UnknownFilterTypeError
from sincfir.signal import FilterSpec, HannWindow

class TestFilterSpec(unittest.TestCase):
    """Tests for the FilterSpec class"""

    def test_defaults(self):
        spec = FilterSpec()
        self.assertEqual(spec.filter_type, "lowpass")
        self.assertIsNone(spec.order)
        self.assertIsNone(spec.fc)
        self.assertIsNone(spec.fclo)
        self.assertIsNone(spec.fchi)
        self.assertIsNone(spec.window)

    def test_filter_type_aliases(self):
        for alias in ["bandreject", "notch", "BANDSTOP", "BandReject"]:
            self.assertEqual(FilterSpec(alias).filter_type, "bandstop")
        self.assertEqual(FilterSpec("HighPass").filter_type, "highpass")

    def test_unknown_filter_type(self):
        for filter_type in ["comb", "", None, 3]:
            with self.assertRaises(UnknownFilterTypeError) as cm:
                FilterSpec(filter_type)
            self.assertEqual(cm.exception.filter_type, filter_type)
        spec = FilterSpec()
        with self.assertRaises(UnknownFilterTypeError):
            spec.filter_type = "allpass"
        self.assertEqual(spec.filter_type, "lowpass")

    def test_order(self):
        self.assertEqual(FilterSpec(order=np.int64(11)).order, 11)
        self.assertIsInstance(FilterSpec(order=np.int64(11)).order, int)
        for order in [0, -1, 2.5, "11", True]:
            with self.assertRaises(InvalidParameterError):
                FilterSpec(order=order)

    def test_frequencies(self):
        spec = FilterSpec(fc=np.float32(0.5), fclo=1e-3, fchi=0.999)
        self.assertEqual(spec.fc, 0.5)
        self.assertIsInstance(spec.fc, float)
        for name in ["fc", "fclo", "fchi"]:
            for value in [0, 1, -0.2, 1.5, "0.1", True]:
                with self.assertRaises(InvalidParameterError):
                    FilterSpec(**{name : value})

    def test_window(self):
        win = HannWindow()
        self.assertIs(FilterSpec(window=win).window, win)
        self.assertEqual(FilterSpec(window="kaiser").window, "kaiser")
        for window in ["unknown", 5, {"name" : "kaiser", "beta" : 1.}]:
            with self.assertRaises(InvalidParameterError):
                FilterSpec(window=window)

    def test_clone(self):
        spec = FilterSpec("bandpass", order=21, fclo=0.1, fchi=0.2,
                          window=("kaiser", {"beta" : 2.}))
        spec2 = spec.clone()
        self.assertIsNot(spec, spec2)
        self.assertEqual(repr(spec), repr(spec2))
        spec2 = spec.clone(order=31, filter_type="notch")
        self.assertEqual(spec2.order, 31)
        self.assertEqual(spec2.filter_type, "bandstop")
        self.assertEqual(spec.order, 21)
        self.assertEqual(spec.filter_type, "bandpass")
        with self.assertRaises(InvalidParameterError):
            spec.clone(cutoff=0.1)
        with self.assertRaises(InvalidParameterError):
            spec.clone(fc=2.)

    def test_from_mapping(self):
        spec = FilterSpec.from_mapping({"filter_type" : "notch", "order" : 11,
                                        "fclo" : 0.1, "fchi" : 0.2})
        self.assertEqual(spec.filter_type, "bandstop")
        self.assertEqual(spec.order, 11)
        self.assertIsNone(spec.fc)
        with self.assertRaises(InvalidParameterError) as cm:
            FilterSpec.from_mapping({"type" : "lowpass", "fc" : 0.1})
        self.assertIn("'type'", str(cm.exception))
        with self.assertRaises(UnknownFilterTypeError):
            FilterSpec.from_mapping({"filter_type" : "comb"})

    def test_check_config(self):
        FilterSpec("lowpass", order=20, fc=0.1).check_config()
        FilterSpec("highpass", order=21, fc=0.1).check_config()
        FilterSpec("bandpass", order=21, fclo=0.1, fchi=0.2).check_config()
        FilterSpec("window", order=4).check_config()

        invalid = [
            FilterSpec("lowpass", fc=0.1),
            FilterSpec("lowpass", order=21),
            FilterSpec("highpass", order=21, fclo=0.1, fchi=0.2),
            FilterSpec("bandpass", order=21, fclo=0.1),
            FilterSpec("bandstop", order=21, fchi=0.1),
            FilterSpec("bandstop", order=21, fclo=0.3, fchi=0.1),
        ]
        for spec in invalid:
            with self.assertRaises(InvalidParameterError):
                spec.check_config()

        for filter_type in ["highpass", "bandpass", "bandstop"]:
            spec = FilterSpec(filter_type, order=10, fc=0.1, fclo=0.1,
                              fchi=0.2)
            with self.assertRaises(ParityError):
                spec.check_config()

    def test_error_hierarchy(self):
        """All errors can be caught as FilterDesignError or ValueError"""
        for err in [InvalidParameterError, ParityError,
                    UnknownFilterTypeError]:
            self.assertTrue(issubclass(err, FilterDesignError))
            self.assertTrue(issubclass(err, ValueError))

    def test_show(self):
        spec = FilterSpec("bandstop", order=11, fclo=0.1, fchi=0.2)
        spec.show()
        self.assertIn("fchi=0.2", repr(spec))
