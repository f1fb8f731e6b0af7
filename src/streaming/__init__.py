"""Streaming layer - from raw response frames to transcript updates.

Responsibilities:
    - Line-buffered UTF-8 decoding across arbitrary frame boundaries
    - Classification of ``data: `` event lines versus protocol noise
    - Exactly-once application of payload fragments to the transcript
"""

from src.streaming.decoder import StreamDecoder
from src.streaming.reducer import DATA_PREFIX, EventReducer, ReducerStrategy

__all__ = ["DATA_PREFIX", "EventReducer", "ReducerStrategy", "StreamDecoder"]
