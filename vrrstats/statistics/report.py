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

from typing import List

from vrrstats.common.exceptions import VrrStatsException
from vrrstats.statistics.types import DisplayPresentStatistics

try:
  import pandas as pd
  HAS_PANDAS = True
except ModuleNotFoundError:
  HAS_PANDAS = False
except ImportError:
  HAS_PANDAS = False

STATISTICS_COLUMNS = [
    'active_config_id',
    'power_mode',
    'brightness_mode',
    'num_vsync',
    'count',
    'last_timestamp_ns',
    'updated',
]


def format_statistics(statistics: DisplayPresentStatistics) -> List[str]:
  lines = []
  for profile, record in sorted(statistics.items(), key=lambda x: x[0]):
    config = profile.display_config
    lines.append(f'power mode = {config.power_mode.name}, '
                 f'id = {config.active_config_id}, '
                 f'brightness mode = {config.brightness_mode.name}, '
                 f'vsync = {profile.num_vsync} : count = {record.count}, '
                 f'last entry time = {record.last_timestamp_ns}')
  return lines


def statistics_as_pandas_dataframe(statistics: DisplayPresentStatistics):
  """Converts a statistics snapshot into a pandas dataframe with one row per
  present profile.

  Power and brightness modes are stored by name so the frame can be filtered
  without importing the enums, e.g. df[df.power_mode == 'ON'].
  """
  if not HAS_PANDAS:
    raise VrrStatsException(
        'pandas/numpy dependency missing. Please run `pip3 install pandas numpy`'
    )

  rows = []
  for profile, record in sorted(statistics.items(), key=lambda x: x[0]):
    config = profile.display_config
    rows.append([
        config.active_config_id,
        config.power_mode.name,
        config.brightness_mode.name,
        profile.num_vsync,
        record.count,
        record.last_timestamp_ns,
        record.updated,
    ])
  return pd.DataFrame(rows, columns=STATISTICS_COLUMNS)
