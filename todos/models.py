"""
Todo record as stored in the `todos` table.
"""

from dataclasses import dataclass
from typing import Dict, Optional


@dataclass(frozen=True)
class Todo:
    id: str
    content: Optional[str] = None
    created_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict) -> "Todo":
        return cls(
            id=str(row["id"]),
            content=row.get("content"),
            created_at=row.get("created_at"),
        )
