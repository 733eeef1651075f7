"""Immutable codec configuration, resolved once from the environment."""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from ._alloc import STANDARD_ALLOCATOR
from ._alloc import Allocator

# Largest count representable by a signed 32-bit result
MAX_COUNT = 2**31 - 1

NO_STDALLOC_ENV = "UTFCODEC_NO_STDALLOC"
LEGACY_CONTINUATION_ENV = "UTFCODEC_LEGACY_CONTINUATION"


@dataclass(frozen=True)
class CodecConfig:
    """
    Configures codec behavior with immutable settings.

    Passed explicitly to every operation so alternate allocators and
    limits can be injected without touching process-wide state.
    """

    default_allocator: Allocator | None = STANDARD_ALLOCATOR
    max_count: int = MAX_COUNT
    strict_continuation: bool = True

    def __post_init__(self) -> None:
        if self.default_allocator is not None and not isinstance(
            self.default_allocator, Allocator
        ):
            raise TypeError("default_allocator must be an Allocator or None")
        if isinstance(self.max_count, bool) or not isinstance(
            self.max_count, int
        ):
            raise TypeError("max_count must be an integer")
        if self.max_count < 1:
            raise ValueError("max_count must be positive")
        if not isinstance(self.strict_continuation, bool):
            raise TypeError("strict_continuation must be a boolean")

    @property
    def continuation_max(self) -> int:
        """Highest byte accepted as a UTF-8 continuation byte."""
        return 0xBF if self.strict_continuation else 0xDF

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> CodecConfig:
        """
        Builds a configuration from ``UTFCODEC_*`` environment flags.

        Flags are switched on by presence alone: any value, including
        ``0`` or an empty string, sets them.
        """
        env = os.environ if environ is None else environ
        return cls(
            default_allocator=(
                None if NO_STDALLOC_ENV in env else STANDARD_ALLOCATOR
            ),
            strict_continuation=LEGACY_CONTINUATION_ENV not in env,
        )


DEFAULT_CONFIG = CodecConfig.from_env()
