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
"""Types describing how a display is being driven and how often."""

import dataclasses as dc
import enum
from typing import Dict


# Values match the composer power modes (HWC2::PowerMode).
class PowerMode(enum.IntEnum):
  OFF = 0
  DOZE = 1
  ON = 2
  DOZE_SUSPEND = 3

  @property
  def is_suspended(self) -> bool:
    # No frames are presented in these modes.
    return self in (PowerMode.OFF, PowerMode.DOZE_SUSPEND)


class BrightnessMode(enum.IntEnum):
  NORMAL = 0
  HIGH = 1
  INVALID = 2


class PresentFrameFlag(enum.IntFlag):
  # The frame was presented while the panel runs in low power (doze) mode;
  # only fixed low power refresh rates are possible then.
  PRESENTING_WHEN_DOZE = 1 << 0


@dc.dataclass(frozen=True, order=True)
class DisplayConfiguration:
  active_config_id: int = 0
  power_mode: PowerMode = PowerMode.ON
  brightness_mode: BrightnessMode = BrightnessMode.NORMAL


@dc.dataclass(frozen=True, order=True)
class PresentProfile:
  display_config: DisplayConfiguration = DisplayConfiguration()

  # Number of TE ticks the frame stayed on screen.
  num_vsync: int = 1


@dc.dataclass
class DisplayPresentRecord:
  count: int = 0
  last_timestamp_ns: int = 0

  # Set on every change; cleared when the record is reported through
  # PresentStatisticsTracker.get_updated_statistics.
  updated: bool = False


DisplayPresentStatistics = Dict[PresentProfile, DisplayPresentRecord]
