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

import abc

from vrrstats.statistics.types import BrightnessMode


class DisplayContextProvider(abc.ABC):
  """Provides the parts of the display state the tracker cannot observe
  through presents."""

  @abc.abstractmethod
  def get_brightness_mode(self) -> BrightnessMode:
    """Returns the brightness mode the panel currently runs in.

    Queried on every present; implementations should be cheap and must not
    block.
    """
    raise NotImplementedError
