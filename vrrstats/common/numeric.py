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

from vrrstats.common.exceptions import VrrStatsException

NANOS_PER_SECOND = 1_000_000_000


def round_divide(dividend: int, divisor: int) -> int:
  """Divides two integers, rounding half away from zero.

  Refresh tick arithmetic is done on integer nanoseconds so this must not go
  through floating point: 1e9 / 120 has to come out as 8333333 exactly.

  e.g.
    round_divide(25, 10) == 3
    round_divide(24, 10) == 2
    round_divide(-25, 10) == -3
  """
  if divisor == 0:
    raise VrrStatsException('Division by zero in tick arithmetic')
  quotient, remainder = divmod(abs(dividend), abs(divisor))
  if remainder * 2 >= abs(divisor):
    quotient += 1
  return quotient if (dividend < 0) == (divisor < 0) else -quotient


def frequency_to_interval_ns(frequency: int) -> int:
  if frequency <= 0:
    raise VrrStatsException(f'Frequency must be positive (got {frequency}).')
  return round_divide(NANOS_PER_SECOND, frequency)
