#!/usr/bin/env python3
"""
Processing Configuration

Options shared by the compositor and processors, plus a loader for INI files.

INI Format:
    [processing]
    only_visible_layers = true
    include_background_layer = false
    merge_duplicates = true
    border_padding = 0
    spacing = 1
    inner_padding = 0
    layout = grid              ; row, column, grid, packed
    premultiply_alpha = false
"""

import configparser
from dataclasses import dataclass, fields
from enum import Enum
from pathlib import Path
from typing import Union

from ..utils import logWarning


class AtlasLayout(Enum):
    """How flattened frames are arranged in a texture atlas."""
    ROW = 'row'          # Single row, left to right
    COLUMN = 'column'    # Single column, top to bottom
    GRID = 'grid'        # ceil(sqrt(n)) columns
    PACKED = 'packed'    # Shelf packing into a power-of-two width


_TRUE_VALUES = ('true', '1', 'yes', 'on')
_FALSE_VALUES = ('false', '0', 'no', 'off')


@dataclass(frozen=True)
class ProcessingOptions:
    """Options for flattening frames and building atlases"""
    only_visible_layers: bool = True
    include_background_layer: bool = False
    merge_duplicates: bool = True  # Identical frames share one atlas cell
    border_padding: int = 0  # Pixels around the whole atlas
    spacing: int = 0  # Pixels between atlas cells
    inner_padding: int = 0  # Pixels inside each atlas cell around the frame
    layout: AtlasLayout = AtlasLayout.GRID
    premultiply_alpha: bool = False  # Applied once to finished buffers

    def __post_init__(self):
        """Validate options"""
        for name in ('border_padding', 'spacing', 'inner_padding'):
            value = getattr(self, name)
            if value < 0:
                raise ValueError(f"{name} must be >= 0, got {value}")

        if not isinstance(self.layout, AtlasLayout):
            raise ValueError(f"layout must be an AtlasLayout, got {self.layout!r}")


DEFAULT_OPTIONS = ProcessingOptions()


def _parse_bool(key: str, value: str) -> bool:
    lowered = value.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean for '{key}': {value}")


def _parse_int(key: str, value: str) -> int:
    try:
        return int(value.strip())
    except ValueError as e:
        raise ValueError(f"Invalid integer for '{key}': {value}") from e


def _parse_layout(value: str) -> AtlasLayout:
    try:
        return AtlasLayout(value.strip().lower())
    except ValueError as e:
        choices = ", ".join(layout.value for layout in AtlasLayout)
        raise ValueError(f"Invalid layout '{value}' (expected one of: {choices})") from e


def load_processing_options(config_path: Union[str, Path], section: str = 'processing') -> ProcessingOptions:
    """
    Load processing options from an INI file.

    Missing keys keep their defaults. Unknown keys are reported as warnings.

    Args:
        config_path: Path to the INI file
        section: Section holding the options

    Returns:
        ProcessingOptions

    Raises:
        FileNotFoundError: Config file does not exist
        ValueError: Section missing or a value cannot be parsed
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    config = configparser.ConfigParser(inline_comment_prefixes=(';', '#'))
    config.read(config_path, encoding='utf-8')

    if not config.has_section(section):
        raise ValueError(f"Section [{section}] not found in {config_path}")

    data = config[section]
    known = {f.name: f for f in fields(ProcessingOptions)}
    values = {}

    for key, raw in data.items():
        if key not in known:
            logWarning(f"Unknown processing option '{key}' in {config_path}")
            continue

        default = known[key].default
        if key == 'layout':
            values[key] = _parse_layout(raw)
        elif isinstance(default, bool):
            values[key] = _parse_bool(key, raw)
        else:
            values[key] = _parse_int(key, raw)

    return ProcessingOptions(**values)
