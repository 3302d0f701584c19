"""
Sample version data for demos and manual testing.

Publish dates are spread evenly over the timeline with some jitter; each
version opens shortly after it is published and stays valid for one to four
months, never past the end of the timeline.
"""

from __future__ import annotations

import random
from typing import List, Optional

from fareversion.constants import (
    MS_PER_DAY,
    SAMPLE_END_DATE,
    SAMPLE_EXTRA_WINDOW_DAYS,
    SAMPLE_MAX_OPEN_DELAY_DAYS,
    SAMPLE_MIN_WINDOW_DAYS,
    SAMPLE_PUBLISH_JITTER_DAYS,
    SAMPLE_PUBLISH_TAIL_DAYS,
    SAMPLE_START_DATE,
    SAMPLE_VERSION_COUNT,
)
from fareversion.models import VersionRecord
from fareversion.utils.timeconv import InstantLike, to_millis


class SampleDataGenerator:
    """Generate plausible version records over a timeline.

    Args:
        start: First instant of the timeline.
        end: Last instant of the timeline; no window closes after it.
        version_count: Number of versions to generate (at least 1).
        seed: Seed for reproducible output.

    Example:
        >>> records = SampleDataGenerator(seed=7).generate()
        >>> [r.version for r in records]
        ['v1', 'v2', 'v3', 'v4']
    """

    def __init__(
        self,
        start: InstantLike = SAMPLE_START_DATE,
        end: InstantLike = SAMPLE_END_DATE,
        version_count: int = SAMPLE_VERSION_COUNT,
        seed: Optional[int] = None,
    ) -> None:
        if version_count < 1:
            raise ValueError("version_count must be at least 1")

        self.start_ms = to_millis(start)
        self.end_ms = to_millis(end)
        if self.end_ms <= self.start_ms:
            raise ValueError("end must be after start")

        self.version_count = version_count
        self.total_days = int((self.end_ms - self.start_ms) // MS_PER_DAY)
        self._rng = random.Random(seed)

    def _publish_offset_days(self, index: int) -> float:
        if self.version_count == 1:
            base = 0.0
        else:
            base = float(index * self.total_days // (self.version_count - 1))
        jitter = self._rng.random() * 2 * SAMPLE_PUBLISH_JITTER_DAYS
        offset = base + jitter - SAMPLE_PUBLISH_JITTER_DAYS
        upper = max(0, self.total_days - SAMPLE_PUBLISH_TAIL_DAYS)
        return max(0.0, min(offset, float(upper)))

    def _at(self, days: float) -> int:
        return int(self.start_ms + days * MS_PER_DAY)

    def generate(self) -> List[VersionRecord]:
        """Return ``version_count`` records named ``v1``, ``v2``, ..."""
        records: List[VersionRecord] = []

        for index in range(self.version_count):
            publish_days = self._publish_offset_days(index)
            publish_ms = self._at(publish_days)

            open_days = publish_days + self._rng.random() * SAMPLE_MAX_OPEN_DELAY_DAYS
            open_ms = max(self._at(open_days), publish_ms)

            length_days = (
                SAMPLE_MIN_WINDOW_DAYS + self._rng.random() * SAMPLE_EXTRA_WINDOW_DAYS
            )
            close_ms = int(open_ms + length_days * MS_PER_DAY)
            if close_ms > self.end_ms:
                close_ms = int(self.end_ms)
                if close_ms <= open_ms:
                    close_ms = open_ms + MS_PER_DAY

            number = index + 1
            records.append(
                VersionRecord(
                    version=f"v{number}",
                    publish_date=publish_ms,
                    open=open_ms,
                    close=close_ms,
                    payload={"category": f"Version {number}"},
                )
            )

        return records


def generate_sample_versions(
    version_count: int = SAMPLE_VERSION_COUNT,
    *,
    start: InstantLike = SAMPLE_START_DATE,
    end: InstantLike = SAMPLE_END_DATE,
    seed: Optional[int] = None,
) -> List[VersionRecord]:
    """Shortcut for ``SampleDataGenerator(...).generate()``."""
    return SampleDataGenerator(start, end, version_count, seed).generate()

