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

import dataclasses as dc
import enum
from typing import Any, Callable


class EventType(enum.Enum):
  # Fires when no present has been observed for a full timeout window.
  PRESENT_TIMEOUT = 0

  # Periodic dump of the statistics table to the debug log.
  STATISTIC_UPDATE = 1


@dc.dataclass
class TimedEvent:
  type: EventType
  deadline_ns: int
  action: Callable[[], Any]
