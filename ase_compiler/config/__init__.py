#!/usr/bin/env python3
"""
Config module for processing options.
"""

from .processing_config import AtlasLayout, ProcessingOptions, DEFAULT_OPTIONS, load_processing_options

__all__ = ['AtlasLayout', 'ProcessingOptions', 'DEFAULT_OPTIONS', 'load_processing_options']
