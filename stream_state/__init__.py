"""Stream table state management module."""

from stream_state.state import StreamState
from stream_state.initialization import build_initial_state

__all__ = [
    'StreamState',
    'build_initial_state',
]
