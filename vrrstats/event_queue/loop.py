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
"""Contains the thread which waits for and runs TimedEvents."""

import logging
import threading
from typing import Optional

from vrrstats.common.numeric import NANOS_PER_SECOND
from vrrstats.common.platform import PlatformDelegate
from vrrstats.event_queue.queue import EventQueue


def dispatch_due(queue: EventQueue, now_ns: int) -> int:
  """Runs the action of every event due at |now_ns|, in deadline order.

  Returns the number of actions which were run.
  """
  count = 0
  for event in queue.pop_due(now_ns):
    event.action()
    count += 1
  return count


class EventLoop:
  """Runs the actions of an EventQueue on a dedicated thread when their
  deadlines arrive.

  Usage:
    with EventLoop(queue) as loop:
      ...  # components schedule events on |queue|
  """

  def __init__(self,
               queue: EventQueue,
               platform_delegate: Optional[PlatformDelegate] = None):
    self.queue = queue
    self.platform_delegate = platform_delegate or PlatformDelegate()
    self._cond = threading.Condition()
    self._running = False
    self._thread: Optional[threading.Thread] = None

  def start(self):
    with self._cond:
      if self._running:
        return
      self._running = True
      self.queue.set_schedule_listener(self.wake)
      self._thread = threading.Thread(
          target=self._run, name='vrrstats-event-loop', daemon=True)
      self._thread.start()

  def stop(self):
    with self._cond:
      if not self._running:
        return
      self._running = False
      self.queue.set_schedule_listener(None)
      self._cond.notify_all()
      thread, self._thread = self._thread, None

    if thread and thread is not threading.current_thread():
      thread.join()

  def wake(self):
    with self._cond:
      self._cond.notify_all()

  @property
  def running(self) -> bool:
    return self._running

  def _run(self):
    while True:
      with self._cond:
        if not self._running:
          return
        deadline_ns = self.queue.next_deadline_ns()
        now_ns = self.platform_delegate.now_ns()
        if deadline_ns is None or deadline_ns > now_ns:
          timeout = None
          if deadline_ns is not None:
            timeout = (deadline_ns - now_ns) / NANOS_PER_SECOND
          self._cond.wait(timeout)
          continue

      try:
        dispatch_due(self.queue, now_ns)
      except Exception:
        logging.exception('Event action raised; continuing event loop')

  def __enter__(self):
    self.start()
    return self

  def __exit__(self, a, b, c):
    self.stop()
    return False

  def __del__(self):
    self.stop()
