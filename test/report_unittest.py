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

from vrrstats.statistics.report import HAS_PANDAS
from vrrstats.statistics.report import STATISTICS_COLUMNS
from vrrstats.statistics.report import format_statistics
from vrrstats.statistics.report import statistics_as_pandas_dataframe
from vrrstats.statistics.types import BrightnessMode
from vrrstats.statistics.types import DisplayConfiguration
from vrrstats.statistics.types import DisplayPresentRecord
from vrrstats.statistics.types import PowerMode
from vrrstats.statistics.types import PresentProfile

STATISTICS = {
    PresentProfile(
        DisplayConfiguration(1, PowerMode.ON, BrightnessMode.HIGH), 2):
        DisplayPresentRecord(count=5, last_timestamp_ns=300, updated=True),
    PresentProfile(DisplayConfiguration(0, PowerMode.DOZE), 4):
        DisplayPresentRecord(count=1, last_timestamp_ns=100),
}


class TestReport(unittest.TestCase):

  def test_format_statistics(self):
    lines = format_statistics(STATISTICS)
    self.assertEqual(lines, [
        'power mode = DOZE, id = 0, brightness mode = NORMAL, vsync = 4 : '
        'count = 1, last entry time = 100',
        'power mode = ON, id = 1, brightness mode = HIGH, vsync = 2 : '
        'count = 5, last entry time = 300',
    ])

  def test_format_empty(self):
    self.assertEqual(format_statistics({}), [])

  def test_profiles_are_ordered(self):
    low = PresentProfile(DisplayConfiguration(0, PowerMode.ON), 1)
    high = PresentProfile(DisplayConfiguration(0, PowerMode.ON), 2)
    other_config = PresentProfile(DisplayConfiguration(1, PowerMode.OFF), 1)
    self.assertEqual(sorted([other_config, high, low]), [low, high, other_config])
    self.assertEqual(low, PresentProfile(DisplayConfiguration(), 1))
    self.assertEqual(len({low, PresentProfile(DisplayConfiguration(), 1)}), 1)

  @unittest.skipUnless(HAS_PANDAS, 'pandas is not installed')
  def test_as_pandas_dataframe(self):
    df = statistics_as_pandas_dataframe(STATISTICS)
    self.assertEqual(list(df.columns), STATISTICS_COLUMNS)
    self.assertEqual(len(df), 2)
    self.assertEqual(list(df.power_mode), ['DOZE', 'ON'])
    self.assertEqual(list(df.num_vsync), [4, 2])
    self.assertEqual(list(df['count']), [1, 5])
    self.assertEqual(list(df.updated), [False, True])
    self.assertEqual(int(df[df.brightness_mode == 'HIGH'].active_config_id.iloc[0]), 1)

  @unittest.skipUnless(HAS_PANDAS, 'pandas is not installed')
  def test_empty_dataframe(self):
    df = statistics_as_pandas_dataframe({})
    self.assertEqual(list(df.columns), STATISTICS_COLUMNS)
    self.assertEqual(len(df), 0)
