# Copyright (C) 2024 The Android Open Source Project
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import unittest

from vrrstats.common.exceptions import VrrStatsException
from vrrstats.common.numeric import NANOS_PER_SECOND
from vrrstats.common.numeric import frequency_to_interval_ns
from vrrstats.common.numeric import round_divide


class TestRoundDivide(unittest.TestCase):

  def test_exact(self):
    self.assertEqual(round_divide(30, 10), 3)
    self.assertEqual(round_divide(0, 7), 0)

  def test_rounds_half_away_from_zero(self):
    self.assertEqual(round_divide(25, 10), 3)
    self.assertEqual(round_divide(24, 10), 2)
    self.assertEqual(round_divide(-25, 10), -3)
    self.assertEqual(round_divide(-24, 10), -2)
    self.assertEqual(round_divide(25, -10), -3)
    self.assertEqual(round_divide(-25, -10), 3)

  def test_zero_divisor(self):
    with self.assertRaises(VrrStatsException):
      round_divide(1, 0)

  def test_refresh_intervals(self):
    self.assertEqual(frequency_to_interval_ns(60), 16666667)
    self.assertEqual(frequency_to_interval_ns(120), 8333333)
    self.assertEqual(frequency_to_interval_ns(240), 4166667)
    self.assertEqual(frequency_to_interval_ns(1), NANOS_PER_SECOND)

  def test_nearby_rate_counts_as_one_tick(self):
    # A 119.88Hz frame measured against a 120Hz TE.
    frame_interval_ns = 8341675
    te_interval_ns = frequency_to_interval_ns(120)
    self.assertEqual(round_divide(frame_interval_ns, te_interval_ns), 1)
    self.assertEqual(round_divide(2 * frame_interval_ns, te_interval_ns), 2)

  def test_invalid_frequency(self):
    with self.assertRaises(VrrStatsException):
      frequency_to_interval_ns(0)
    with self.assertRaises(VrrStatsException):
      frequency_to_interval_ns(-60)
