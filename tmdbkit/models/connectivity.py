from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PathStatus(str, Enum):
    SATISFIED = "satisfied"
    UNSATISFIED = "unsatisfied"
    REQUIRES_CONNECTION = "requires_connection"


class ConnectivityState(BaseModel):
    """Snapshot published by ``ConnectivityMonitor``; replaced, never mutated."""

    model_config = ConfigDict(frozen=True)

    is_online: bool
    detail: PathStatus

    @classmethod
    def from_status(cls, status: PathStatus) -> ConnectivityState:
        return cls(is_online=status is PathStatus.SATISFIED, detail=status)
