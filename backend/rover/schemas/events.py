from __future__ import annotations

from typing import Any, Dict

from pydantic import BaseModel


class WsMessage(BaseModel):
    kind: str  # telemetry|status
    data: Dict[str, Any]
