from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class Project:
    """Domain entity: a project and its team roster.

    The roster only ever grows.
    """

    project_id: int
    name: str
    end_date: date
    assigned_workers: frozenset[int] = field(default_factory=frozenset)
