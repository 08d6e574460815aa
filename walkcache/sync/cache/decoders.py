"""Structured-data decoders for descriptor files.

A decoder turns the raw bytes of a descriptor into an in-memory value.
Decoders are selected by the descriptor's file suffix.
"""

import json
import os
from typing import Any, Callable, Dict, Mapping, Optional

from ..._common.errors import DecodeError, UnsupportedError
from ..._common.sequence import constantly, or_chain

Decoder = Callable[[bytes], Any]


def decode_json(raw: bytes) -> Any:
    """Decode JSON bytes. Objects are decoded as dicts.

    Raises:
        ValueError: If the bytes are not valid UTF-8 JSON
    """
    return json.loads(raw.decode("utf-8"))


DEFAULT_DECODERS: Dict[str, Decoder] = {
    ".json": decode_json,
}


def select_decoder(path: str,
                   decoders: Mapping[str, Decoder],
                   default: Optional[Decoder] = None) -> Decoder:
    """Pick the decoder for ``path``.

    Registered suffixes are matched case-insensitively; ``default`` is used
    when none matches.

    Args:
        path: Descriptor path
        decoders: Mapping of suffix (with leading dot) to decoder
        default: Fallback decoder

    Returns:
        The decoder to use

    Raises:
        UnsupportedError: If no decoder is registered and no default is set
    """
    suffix = os.path.splitext(path)[1].lower()
    chain = or_chain(
        lambda: decoders.get(suffix),
        constantly(default),
    )
    decoder = chain()
    if decoder is None:
        known = ", ".join(sorted(decoders)) or "none"
        raise UnsupportedError(
            f"No decoder for {path!r} (suffix {suffix or '<none>'!r}; known: {known})",
            path,
        )
    return decoder


def decode(path: str, raw: bytes, decoder: Decoder) -> Any:
    """Run ``decoder`` over ``raw``, wrapping failures in DecodeError."""
    try:
        return decoder(raw)
    except (ValueError, TypeError) as e:
        raise DecodeError(f"Cannot decode {path!r}: {e}", path) from e
