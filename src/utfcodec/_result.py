"""Result record returned by conversions that produce a buffer."""

from __future__ import annotations

from collections.abc import MutableSequence
from dataclasses import dataclass
from enum import Enum


class Form(Enum):
    """
    Text representations the codec converts between.

    Closed set: the conversions are free functions over these three forms.
    """

    UTF8 = "utf-8"
    UTF16 = "utf-16"
    CODEPOINTS = "codepoints"


@dataclass(frozen=True)
class Conversion:
    """
    Outcome of a successful conversion.

    ``buffer`` holds ``count`` elements followed by a zero terminator. It is
    either the caller's own buffer or a fresh one now owned by the caller.
    """

    count: int
    buffer: MutableSequence[int]
    form: Form

    @property
    def units(self) -> list[int]:
        """Converted elements without the terminator."""
        return list(self.buffer[: self.count])

    def text(self) -> str:
        """Renders the converted elements as a Python string."""
        units = self.units
        if self.form is Form.CODEPOINTS:
            return "".join(map(chr, units))
        if self.form is Form.UTF8:
            return bytes(units).decode("utf-8")
        raw = b"".join(unit.to_bytes(2, "little") for unit in units)
        return raw.decode("utf-16-le")
