from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Union

from ..common.datetime_utils import as_calendar_date
from ..core.exceptions import BoundaryViolation

BOUNDARY_MESSAGE = "This task date exceeds the project end date. Please extend the project to continue."


def exceeds_project_end(task_date: Union[date, datetime], project_end_date: Union[date, datetime]) -> bool:
    """The project end date itself is still a valid task date."""
    return as_calendar_date(task_date) > as_calendar_date(project_end_date)


def ensure_within_project_end(
    task_date: Union[date, datetime],
    project_end_date: Optional[Union[date, datetime]],
) -> None:
    if project_end_date is None:
        return
    if exceeds_project_end(task_date, project_end_date):
        raise BoundaryViolation(BOUNDARY_MESSAGE)
