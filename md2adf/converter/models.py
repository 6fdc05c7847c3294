"""Data models for conversion results and warnings.

All models use dataclasses, following the patterns of the ADF models.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from ..adf.adf_models import AdfDocument


class WarningKind(Enum):
    """Categories of conversion issues, shared by warnings and aborts.

    - INVALID_SYNTAX: the token source could not parse the input
    - UNSUPPORTED_FEATURE: no representation in the target schema/context
    - LOSSY_CONVERSION: representable only after a downgrade or drop
    - RISKY_FEATURE: emitted as-is but renders inconsistently downstream
    """
    INVALID_SYNTAX = "invalid_syntax"
    UNSUPPORTED_FEATURE = "unsupported_feature"
    LOSSY_CONVERSION = "lossy_conversion"
    RISKY_FEATURE = "risky_feature"


@dataclass(frozen=True)
class ConversionWarning:
    """A lossy or unsupported transformation noticed during conversion.

    Attributes:
        kind: Warning category
        message: Human-readable description
        line: 1-indexed source line, when the token carries a line map
        original_text: Markdown text that triggered the warning, if known
    """
    kind: WarningKind
    message: str
    line: Optional[int] = None
    original_text: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        result: Dict[str, Any] = {"kind": self.kind.value, "message": self.message}
        if self.line is not None:
            result["line"] = self.line
        if self.original_text is not None:
            result["original_text"] = self.original_text
        return result


class WarningLog:
    """Append-only warning accumulator for a single conversion call.

    One instance is created per call and handed by reference to every
    resolver helper, so warnings come out in the order they were raised.
    """

    def __init__(self):
        self._warnings: List[ConversionWarning] = []

    def append(self, warning: ConversionWarning) -> None:
        self._warnings.append(warning)

    def __iter__(self):
        return iter(self._warnings)

    def __len__(self) -> int:
        return len(self._warnings)

    def snapshot(self) -> Tuple[ConversionWarning, ...]:
        """Return an immutable copy of the warnings recorded so far."""
        return tuple(self._warnings)


@dataclass
class ConversionResult:
    """Result of converting markdown with warnings.

    Attributes:
        document: The generated ADF document
        warnings: Warnings recorded during conversion, in order
    """
    document: AdfDocument
    warnings: Tuple[ConversionWarning, ...] = field(default_factory=tuple)

    def warnings_of_kind(self, kind: WarningKind) -> List[ConversionWarning]:
        return [w for w in self.warnings if w.kind == kind]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "adf": self.document.to_dict(),
            "warnings": [w.to_dict() for w in self.warnings],
        }
