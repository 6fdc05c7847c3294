"""Context presets and conversion option resolution.

A preset is a named bundle of defaults tuned for one downstream rendering
context. Callers pick a preset and may override any field; resolve_options()
merges the two into one fully populated ResolvedOptions record.

Preset table:
    default: headings off, max level 6, soft breaks as spaces, non-strict,
             code language "text"
    comment: as default; headings never allowed, block quotes unwrapped,
             risky-node warnings on
    task:    as default; headings never allowed
    story:   as default; headings on (and allowed)
"""

from dataclasses import dataclass, fields
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Union

from ..errors import ConfigError


class ContextPreset(Enum):
    """Named downstream contexts."""
    COMMENT = "comment"
    TASK = "task"
    STORY = "story"
    DEFAULT = "default"

    @property
    def allows_headings(self) -> bool:
        """Whether heading nodes may be emitted in this context at all."""
        return self in (ContextPreset.STORY, ContextPreset.DEFAULT)

    @property
    def unwraps_blockquotes(self) -> bool:
        """Whether block quotes must be spliced into their parent."""
        return self is ContextPreset.COMMENT

    @property
    def tables_are_risky(self) -> bool:
        return self is ContextPreset.COMMENT


@dataclass
class ConversionOptions:
    """Caller-supplied conversion options.

    Every field is optional; None means "use the preset's default".

    Attributes:
        preset: Context preset name or enum value (default: "default")
        use_headings: Opt in to real heading nodes (still gated by preset)
        max_heading_level: Deepest heading level kept as a heading (1-6)
        preserve_line_breaks: Soft breaks become hard breaks instead of spaces
        strict_mode: Abort on incompatible headings and horizontal rules
        default_code_language: Language for fenced code without an info string
        warn_on_risky_nodes: Record RiskyFeature warnings
    """
    preset: Optional[Union[str, ContextPreset]] = None
    use_headings: Optional[bool] = None
    max_heading_level: Optional[int] = None
    preserve_line_breaks: Optional[bool] = None
    strict_mode: Optional[bool] = None
    default_code_language: Optional[str] = None
    warn_on_risky_nodes: Optional[bool] = None

    # camelCase spellings accepted by from_mapping()
    ALIASES = MappingProxyType({
        "useHeadings": "use_headings",
        "maxHeadingLevel": "max_heading_level",
        "preserveLineBreaks": "preserve_line_breaks",
        "strictMode": "strict_mode",
        "defaultCodeLanguage": "default_code_language",
        "warnOnRiskyNodes": "warn_on_risky_nodes",
    })

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> "ConversionOptions":
        """Build options from a dict using snake_case or camelCase keys.

        Raises:
            ConfigError: If a key is not a known option
        """
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}
        for key, value in mapping.items():
            name = cls.ALIASES.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown option '{key}'", key)
            values[name] = value
        return cls(**values)

    def to_mapping(self) -> Dict[str, Any]:
        """Return only the fields that were explicitly set."""
        result: Dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, ContextPreset):
                value = value.value
            result[f.name] = value
        return result


@dataclass(frozen=True)
class ResolvedOptions:
    """Fully resolved options for one conversion (no None fields)."""
    preset: ContextPreset
    use_headings: bool
    max_heading_level: int
    preserve_line_breaks: bool
    strict_mode: bool
    default_code_language: str
    warn_on_risky_nodes: bool


def _preset_defaults(**overrides: Any) -> Mapping[str, Any]:
    base = {
        "use_headings": False,
        "max_heading_level": 6,
        "preserve_line_breaks": False,
        "strict_mode": False,
        "default_code_language": "text",
        "warn_on_risky_nodes": False,
    }
    base.update(overrides)
    return MappingProxyType(base)


PRESET_CONFIGS: Mapping[ContextPreset, Mapping[str, Any]] = MappingProxyType({
    ContextPreset.DEFAULT: _preset_defaults(),
    ContextPreset.COMMENT: _preset_defaults(warn_on_risky_nodes=True),
    ContextPreset.TASK: _preset_defaults(),
    ContextPreset.STORY: _preset_defaults(use_headings=True),
})

_BOOL_FIELDS = (
    "use_headings",
    "preserve_line_breaks",
    "strict_mode",
    "warn_on_risky_nodes",
)


def parse_preset(value: Union[str, ContextPreset, None]) -> ContextPreset:
    """Normalize a preset name to ContextPreset.

    Raises:
        ConfigError: If the name is not a known preset
    """
    if value is None:
        return ContextPreset.DEFAULT
    if isinstance(value, ContextPreset):
        return value
    if isinstance(value, str):
        try:
            return ContextPreset(value.strip().lower())
        except ValueError:
            pass
    valid = ", ".join(p.value for p in ContextPreset)
    raise ConfigError(f"Unknown preset {value!r} (expected one of: {valid})", "preset")


def resolve_options(
    options: Union[ConversionOptions, Mapping[str, Any], None] = None,
) -> ResolvedOptions:
    """Merge caller options with the selected preset's defaults.

    Args:
        options: ConversionOptions, a plain mapping of option names, or None

    Returns:
        ResolvedOptions with every field populated

    Raises:
        ConfigError: If a value has the wrong type or is out of range
    """
    if options is None:
        options = ConversionOptions()
    elif not isinstance(options, ConversionOptions):
        if not isinstance(options, Mapping):
            raise ConfigError(
                f"Options must be ConversionOptions or a mapping, got {type(options).__name__}"
            )
        options = ConversionOptions.from_mapping(options)

    preset = parse_preset(options.preset)
    defaults = PRESET_CONFIGS[preset]

    merged: Dict[str, Any] = {}
    for name, default in defaults.items():
        value = getattr(options, name)
        merged[name] = default if value is None else value

    for name in _BOOL_FIELDS:
        if not isinstance(merged[name], bool):
            raise ConfigError(
                f"Must be a boolean, got {type(merged[name]).__name__}", name
            )

    level = merged["max_heading_level"]
    if isinstance(level, bool) or not isinstance(level, int):
        raise ConfigError(
            f"Must be an integer, got {type(level).__name__}", "max_heading_level"
        )
    if not 1 <= level <= 6:
        raise ConfigError(f"Must be between 1 and 6, got {level}", "max_heading_level")

    if not isinstance(merged["default_code_language"], str):
        raise ConfigError(
            f"Must be a string, got {type(merged['default_code_language']).__name__}",
            "default_code_language",
        )

    return ResolvedOptions(preset=preset, **merged)
