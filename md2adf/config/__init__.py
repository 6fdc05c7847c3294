"""Conversion configuration: presets, option resolution and loading."""

from .config_loader import ConfigLoader
from .presets import (
    PRESET_CONFIGS,
    ContextPreset,
    ConversionOptions,
    ResolvedOptions,
    parse_preset,
    resolve_options,
)

__all__ = [
    'ConfigLoader',
    'ContextPreset',
    'ConversionOptions',
    'ResolvedOptions',
    'PRESET_CONFIGS',
    'parse_preset',
    'resolve_options',
]
