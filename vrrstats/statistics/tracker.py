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
"""Contains classes for the present statistics tracker.

The tracker classifies every presented frame by the display configuration it
was shown in and the number of TE ticks it stayed on screen, and keeps a count
per classification. Telemetry reporters read the resulting table from another
thread through |get_statistics| or |get_updated_statistics|.
"""

import collections
import dataclasses as dc
import logging
import threading
from typing import Optional

from vrrstats.common.exceptions import VrrStatsException
from vrrstats.common.numeric import NANOS_PER_SECOND
from vrrstats.common.numeric import frequency_to_interval_ns
from vrrstats.common.numeric import round_divide
from vrrstats.common.platform import PlatformDelegate
from vrrstats.event_queue.event import EventType
from vrrstats.event_queue.event import TimedEvent
from vrrstats.event_queue.queue import EventQueue
from vrrstats.statistics.context import DisplayContextProvider
from vrrstats.statistics.report import format_statistics
from vrrstats.statistics.types import BrightnessMode
from vrrstats.statistics.types import DisplayConfiguration
from vrrstats.statistics.types import DisplayPresentRecord
from vrrstats.statistics.types import DisplayPresentStatistics
from vrrstats.statistics.types import PowerMode
from vrrstats.statistics.types import PresentFrameFlag
from vrrstats.statistics.types import PresentProfile

# Defining this field as a module variable means this can be changed by
# implementations at startup and used for all PresentStatisticsTracker objects
# without having to specify on each one.
PLATFORM_DELEGATE = PlatformDelegate


@dc.dataclass
class StatisticsConfig:
  # Highest frame rate the panel can present at. Also the vsync count
  # recorded when no present shows up for a whole timeout window.
  max_frame_rate: int

  # Highest TE frequency the panel supports.
  max_te_frequency: int

  # Period of the statistics dump to the debug log. Only used when
  # |enable_update_dump| is True.
  update_period_ns: int = 0

  # How long the tracker waits for a present before assuming the display
  # free-runs at |max_frame_rate|.
  max_present_interval_ns: int = NANOS_PER_SECOND

  # Frame rate of a frame presented while dozing. The panel only supports
  # fixed rates in low power mode, so the measured interval is ignored.
  low_power_frame_rate: int = 30

  # If True, the statistics table is logged every |update_period_ns|.
  enable_update_dump: bool = False

  def validate(self):
    if self.max_frame_rate <= 0:
      raise VrrStatsException(
          f'max_frame_rate must be positive (got {self.max_frame_rate}).')
    if self.max_te_frequency <= 0:
      raise VrrStatsException(
          f'max_te_frequency must be positive (got {self.max_te_frequency}).')
    if self.max_present_interval_ns <= 0:
      raise VrrStatsException('max_present_interval_ns must be positive '
                              f'(got {self.max_present_interval_ns}).')
    if self.low_power_frame_rate <= 0:
      raise VrrStatsException('low_power_frame_rate must be positive '
                              f'(got {self.low_power_frame_rate}).')
    if self.update_period_ns < 0:
      raise VrrStatsException(
          f'update_period_ns must not be negative (got {self.update_period_ns}).'
      )


class PresentStatisticsTracker:
  """Counts presented frames per (display configuration, vsync count).

  on_present, on_power_state_change, set_active_vrr_configuration and the
  timeouts fired from |event_queue| are expected to come from one context at
  a time; they are nonetheless serialized on an internal lock so the queue
  may be run by an EventLoop thread. get_statistics and
  get_updated_statistics can be called from any thread.

  Usage:
    queue = EventQueue()
    tracker = PresentStatisticsTracker(
        queue, provider, StatisticsConfig(max_frame_rate=120,
                                          max_te_frequency=240))
    with EventLoop(queue):
      tracker.on_present(present_time_ns, flags)
      ...
      stats = tracker.get_updated_statistics()
  """

  def __init__(self,
               event_queue: EventQueue,
               display_context_provider: DisplayContextProvider,
               config: StatisticsConfig,
               platform_delegate: Optional[PlatformDelegate] = None):
    """Creates a tracker and arms its present timeout.

    Args:
      event_queue: queue the present timeout (and the optional statistics
        dump) are scheduled on.
      display_context_provider: queried for the brightness mode on every
        sample.
      config: frame rate configuration of the panel. Raises
        VrrStatsException if it is not usable.
      platform_delegate: clock used to place deadlines and to stamp samples
        which are not tied to a present. Defaults to PLATFORM_DELEGATE().
    """
    config.validate()

    self.config = config
    self.event_queue = event_queue
    self.display_context_provider = display_context_provider
    self.platform_delegate = platform_delegate or PLATFORM_DELEGATE()

    self._max_frame_rate = config.max_frame_rate
    self._max_te_frequency = config.max_te_frequency
    self._min_frame_interval_ns = frequency_to_interval_ns(
        config.max_frame_rate)
    self._te_frequency = config.max_frame_rate
    self._te_interval_ns = frequency_to_interval_ns(self._te_frequency)

    self._display_config = DisplayConfiguration()
    self._num_vsync = 1
    self._last_present_time_ns = 0

    # Guards everything above against the event loop thread.
    self._state_lock = threading.RLock()

    # Guards |_statistics| only; never held while logging or touching the
    # event queue.
    self._statistics_lock = threading.Lock()
    self._statistics = collections.defaultdict(DisplayPresentRecord)

    with self._state_lock:
      self._arm_present_timeout()
      if config.enable_update_dump and config.update_period_ns > 0:
        self._arm_statistic_update()

  @property
  def power_mode(self) -> PowerMode:
    return self._display_config.power_mode

  @property
  def active_config_id(self) -> int:
    return self._display_config.active_config_id

  @property
  def max_frame_rate(self) -> int:
    return self._max_frame_rate

  @property
  def te_frequency(self) -> int:
    return self._te_frequency

  @property
  def te_interval_ns(self) -> int:
    return self._te_interval_ns

  @property
  def min_frame_interval_ns(self) -> int:
    return self._min_frame_interval_ns

  def get_statistics(self) -> DisplayPresentStatistics:
    """Returns a copy of the whole statistics table, ordered by profile."""
    with self._statistics_lock:
      items = [(profile, dc.replace(record))
               for profile, record in self._statistics.items()]
    return dict(sorted(items, key=lambda item: item[0]))

  def get_updated_statistics(self) -> DisplayPresentStatistics:
    """Returns the records changed since the previous call.

    The returned copies still have |updated| set; the live records get the
    flag cleared so they are not reported again until they change.
    """
    with self._statistics_lock:
      items = []
      for profile, record in self._statistics.items():
        if record.updated:
          items.append((profile, dc.replace(record)))
          record.updated = False
    return dict(sorted(items, key=lambda item: item[0]))

  def on_power_state_change(self, from_mode: int, to_mode: int):
    from_mode = PowerMode(from_mode)
    to_mode = PowerMode(to_mode)
    with self._state_lock:
      previous_mode = self._display_config.power_mode
      if previous_mode != from_mode:
        logging.warning(
            'Power mode mismatch between stored state (%s) and reported '
            'previous mode (%s)', previous_mode.name, from_mode.name)

      profile = self._current_profile()
      self._display_config = dc.replace(
          self._display_config, power_mode=to_mode)

      if to_mode.is_suspended:
        self.event_queue.drop_event(EventType.PRESENT_TIMEOUT)
        self._record_sample(profile, self.platform_delegate.now_ns())
      elif from_mode.is_suspended or previous_mode.is_suspended:
        self._arm_present_timeout()

  def on_present(self, present_time_ns: int, flags: int = 0):
    with self._state_lock:
      self._arm_present_timeout()

      if flags & PresentFrameFlag.PRESENTING_WHEN_DOZE:
        num_vsync = self._te_frequency // self.config.low_power_frame_rate
      else:
        num_vsync = round_divide(present_time_ns - self._last_present_time_ns,
                                 self._te_interval_ns)
      self._num_vsync = self._clamp_num_vsync(num_vsync)
      self._last_present_time_ns = present_time_ns

      self._update_current_display_status()
      self._record_sample(self._current_profile(), present_time_ns)

  def on_present_timeout(self):
    """Invoked by the event queue when no present arrived in time.

    Nothing was presented, so the display is assumed to free-run at the
    maximum frame rate.
    """
    with self._state_lock:
      self._update_current_display_status()
      self._num_vsync = self._max_frame_rate
      self._record_sample(self._current_profile(),
                          self.platform_delegate.now_ns())

      # A suspend may have landed while this event was waiting to run; the
      # timeout must stay disarmed in that case.
      if not self._display_config.power_mode.is_suspended:
        self._arm_present_timeout()

  def set_active_vrr_configuration(self, active_config_id: int,
                                   te_frequency: int):
    if te_frequency <= 0:
      raise VrrStatsException(
          f'TE frequency must be positive (got {te_frequency}).')

    with self._state_lock:
      self._display_config = dc.replace(
          self._display_config, active_config_id=active_config_id)
      self._te_frequency = te_frequency
      self._te_interval_ns = frequency_to_interval_ns(te_frequency)

    if te_frequency % self._max_frame_rate != 0:
      logging.warning(
          'TE frequency (%d) is not a multiple of the maximum frame rate (%d)',
          te_frequency, self._max_frame_rate)
    if te_frequency > self._max_te_frequency:
      logging.warning('TE frequency (%d) exceeds the panel maximum (%d)',
                      te_frequency, self._max_te_frequency)

  def close(self):
    """Removes the events this tracker scheduled on the queue."""
    self.event_queue.drop_event(EventType.PRESENT_TIMEOUT)
    self.event_queue.drop_event(EventType.STATISTIC_UPDATE)

  def _current_profile(self) -> PresentProfile:
    return PresentProfile(self._display_config, self._num_vsync)

  def _clamp_num_vsync(self, num_vsync: int) -> int:
    return min(self._max_frame_rate, max(1, num_vsync))

  def _update_current_display_status(self):
    brightness_mode = BrightnessMode(
        self.display_context_provider.get_brightness_mode())
    if brightness_mode == BrightnessMode.INVALID:
      brightness_mode = BrightnessMode.NORMAL
    self._display_config = dc.replace(
        self._display_config, brightness_mode=brightness_mode)

  def _record_sample(self, profile: PresentProfile, timestamp_ns: int):
    with self._statistics_lock:
      record = self._statistics[profile]
      record.count += 1
      record.last_timestamp_ns = timestamp_ns
      record.updated = True

  def _arm_present_timeout(self):
    self.event_queue.drop_event(EventType.PRESENT_TIMEOUT)
    self.event_queue.schedule(
        TimedEvent(
            type=EventType.PRESENT_TIMEOUT,
            deadline_ns=self.platform_delegate.now_ns() +
            self.config.max_present_interval_ns,
            action=self.on_present_timeout))

  def _arm_statistic_update(self):
    self.event_queue.drop_event(EventType.STATISTIC_UPDATE)
    self.event_queue.schedule(
        TimedEvent(
            type=EventType.STATISTIC_UPDATE,
            deadline_ns=self.platform_delegate.now_ns() +
            self.config.update_period_ns,
            action=self._on_statistic_update))

  def _on_statistic_update(self):
    for line in format_statistics(self.get_statistics()):
      logging.debug('Present statistics: %s', line)
    self._arm_statistic_update()
