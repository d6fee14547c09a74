"""tunnelsat/decoding — Reading paths and traces out of models."""

from tunnelsat.decoding.decoder import ModelDecoder, decode_path
from tunnelsat.decoding.renderer import CellState, PositionTrace, StackTrace, TraceRenderer

__all__ = [
    "ModelDecoder",
    "decode_path",
    "TraceRenderer",
    "StackTrace",
    "PositionTrace",
    "CellState",
]
