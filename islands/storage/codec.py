"""
Snapshot codec - SessionState to and from the JSON text kept in a store.
"""

from __future__ import annotations
import json

from ..engine_core.state import SessionState


def encode_snapshot(state: SessionState) -> str:
    return json.dumps(state.to_dict(), sort_keys=True)


def decode_snapshot(snapshot: str) -> SessionState:
    return SessionState.from_dict(json.loads(snapshot))
