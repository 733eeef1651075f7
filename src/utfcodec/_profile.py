"""Hot-path profiling for the transcoding passes."""

from __future__ import annotations

import os
import time
from dataclasses import dataclass
from typing import Any

# Profiling infrastructure - zero-cost when disabled
PROFILE_HOT_PATHS = __debug__ and "UTFCODEC_PROFILE" in os.environ


@dataclass
class HotPathStats:
    """Statistics for profiling hot paths during transcoding."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    units_processed: int = 0

    def record_call(self, duration_ns: int, units: int = 0) -> None:
        """Records a pass with timing and source unit info."""
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.units_processed += units


if PROFILE_HOT_PATHS:
    _hot_path_stats: dict[str, HotPathStats] = {}

    class ProfileContext:
        """Context manager for profiling hot paths."""

        def __init__(self, func_name: str, units: int = 0) -> None:
            self.func_name = func_name
            self.units = units
            self.start_time = 0

        def __enter__(self) -> ProfileContext:
            self.start_time = time.perf_counter_ns()
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            duration = time.perf_counter_ns() - self.start_time
            if self.func_name not in _hot_path_stats:
                _hot_path_stats[self.func_name] = HotPathStats(self.func_name)
            _hot_path_stats[self.func_name].record_call(duration, self.units)

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        """Returns current profiling statistics."""
        return _hot_path_stats.copy()

    def clear_hot_path_stats() -> None:
        """Clears profiling statistics."""
        _hot_path_stats.clear()

else:
    # Zero-cost in production - arguments are accepted and ignored
    class ProfileContext:  # type: ignore[no-redef]
        def __init__(self, func_name: str, units: int = 0) -> None:
            pass

        def __enter__(self) -> ProfileContext:
            return self

        def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
            pass

    def get_hot_path_stats() -> dict[str, HotPathStats]:
        return {}

    def clear_hot_path_stats() -> None:
        pass
