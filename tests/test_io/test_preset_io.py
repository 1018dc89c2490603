"""
Tests for option presets.
"""

import json
import os
import tempfile
import unittest

from halftone.core.options import DitherMode, ProcessingOptions, ToneMode
from halftone.io.preset_io import load_options, save_options


class TestPresets(unittest.TestCase):
    """Test option presets."""

    def test_round_trip(self):
        """Test saved options load back equal."""
        options = ProcessingOptions(
            contrast=1.4, threshold=100, mode=DitherMode.THRESHOLD,
            tone_mode=ToneMode.GRAYSCALE, output_width_cm=8.5, print_dpi=600
        )
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "preset.json")
            self.assertTrue(save_options(options, path))
            with open(path, encoding="utf-8") as f:
                raw = json.load(f)
            self.assertEqual(raw["mode"], "binary")
            self.assertEqual(raw["tone_mode"], "gray")
            self.assertEqual(load_options(path), options)

    def test_missing_file(self):
        """Test a missing preset returns None."""
        with tempfile.TemporaryDirectory() as tmp:
            self.assertIsNone(load_options(os.path.join(tmp, "nope.json")))

    def test_bad_json(self):
        """Test malformed JSON returns None."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bad.json")
            with open(path, "w", encoding="utf-8") as f:
                f.write("{not json")
            self.assertIsNone(load_options(path))

    def test_unknown_mode(self):
        """Test an unknown enum value returns None."""
        with tempfile.TemporaryDirectory() as tmp:
            path = os.path.join(tmp, "bad.json")
            with open(path, "w", encoding="utf-8") as f:
                json.dump({"mode": "ordered"}, f)
            self.assertIsNone(load_options(path))


if __name__ == '__main__':
    unittest.main()
