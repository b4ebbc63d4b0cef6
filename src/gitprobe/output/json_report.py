"""JSON reporter — the same shape the MCP tools return."""

from __future__ import annotations

import json
from typing import Any, Dict


def render(record: Dict[str, Any]) -> str:
    """Return formatted JSON string."""
    return json.dumps(record, indent=2, ensure_ascii=False)
