"""Compiled-artifact cache for descriptor files."""

from .decoders import DEFAULT_DECODERS, Decoder, decode_json, select_decoder
from .purger import CachePurger
from .store import CompiledCacheStore, FORMAT_VERSION, normalize_source

__all__ = [
    'CompiledCacheStore',
    'CachePurger',
    'FORMAT_VERSION',
    'normalize_source',
    'DEFAULT_DECODERS',
    'Decoder',
    'decode_json',
    'select_decoder',
]
