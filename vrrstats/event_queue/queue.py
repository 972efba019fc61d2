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
"""Contains the deadline ordered schedule shared by the display components."""

import heapq
import itertools
import threading
from typing import Callable, Iterator, List, Optional, Tuple

from vrrstats.event_queue.event import EventType
from vrrstats.event_queue.event import TimedEvent


class EventQueue:
  """Orders pending TimedEvents by deadline.

  Events with the same deadline come out in the order they were scheduled.
  The queue never runs anything itself: whoever owns the wait (see
  |event_queue.loop|) pulls due events with |pop_due| and runs their actions.

  Owners wanting a single pending instance of an event type (e.g. a timeout
  which is pushed back on every present) must call |drop_event| before
  scheduling the replacement:
    queue.drop_event(EventType.PRESENT_TIMEOUT)
    queue.schedule(TimedEvent(EventType.PRESENT_TIMEOUT, deadline, fn))
  """

  def __init__(self):
    self._heap: List[Tuple[int, int, TimedEvent]] = []
    self._sequence = itertools.count()
    self._lock = threading.Lock()
    self._schedule_listener: Optional[Callable[[], None]] = None

  def set_schedule_listener(self, listener: Optional[Callable[[], None]]):
    """Registers a callable invoked (outside the queue lock) after every
    |schedule| call; used by EventLoop to re-evaluate its wait."""
    self._schedule_listener = listener

  def schedule(self, event: TimedEvent):
    with self._lock:
      heapq.heappush(self._heap,
                     (event.deadline_ns, next(self._sequence), event))
    listener = self._schedule_listener
    if listener:
      listener()

  def drop_event(self, event_type: EventType):
    """Removes every pending event of |event_type|.

    Events which were already popped for execution are not pending anymore
    and are left alone.
    """
    with self._lock:
      kept = [entry for entry in self._heap if entry[2].type != event_type]
      if len(kept) != len(self._heap):
        heapq.heapify(kept)
        self._heap = kept

  def pop_due(self, now_ns: int) -> Iterator[TimedEvent]:
    """Yields, in deadline order, the events with deadline <= |now_ns|.

    Each event is removed from the queue right before it is yielded, so
    anything dropped or scheduled while the caller is handling an event is
    taken into account for the rest of the iteration.
    """
    while True:
      with self._lock:
        if not self._heap or self._heap[0][0] > now_ns:
          return
        _, _, event = heapq.heappop(self._heap)
      yield event

  def next_deadline_ns(self) -> Optional[int]:
    with self._lock:
      return self._heap[0][0] if self._heap else None

  def pending(self, event_type: EventType) -> int:
    with self._lock:
      return sum(1 for entry in self._heap if entry[2].type == event_type)

  def clear(self):
    with self._lock:
      self._heap = []

  def __len__(self):
    with self._lock:
      return len(self._heap)

  def __bool__(self):
    return len(self) > 0
