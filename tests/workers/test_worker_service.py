from __future__ import annotations

from datetime import date

import pytest

from workforce_scheduler.core.enums import AttendanceStatus, WorkerStatus
from workforce_scheduler.core.exceptions import LifecycleViolation, NotFoundError, ValidationError

D = date(2099, 6, 1)


def test_deactivation_requires_cutoff_date(world):
    world.add_worker(1)
    with pytest.raises(ValidationError):
        world.worker_service.change_status(1, status="inactive")


def test_deactivation_blocks_assignments_from_cutoff(world):
    world.add_worker(1)
    world.mark(1, AttendanceStatus.PRESENT)
    world.mark(1, AttendanceStatus.PRESENT, date(2099, 5, 31))

    worker = world.worker_service.change_status(1, status=WorkerStatus.INACTIVE, inactive_from=D)

    assert worker.status == WorkerStatus.INACTIVE
    assert worker.inactive_from == D
    world.create([1], due=date(2099, 5, 31))
    with pytest.raises(LifecycleViolation):
        world.create([1], due=D)


def test_reactivation_clears_cutoff(world):
    world.add_worker(1, status=WorkerStatus.INACTIVE, inactive_from=D)
    world.mark(1, AttendanceStatus.PRESENT)

    worker = world.worker_service.change_status(1, status="active")

    assert worker.inactive_from is None
    assert world.create([1]).task.assigned_workers == (1,)


def test_other_statuses_keep_existing_cutoff(world):
    world.add_worker(1, status=WorkerStatus.INACTIVE, inactive_from=D)

    worker = world.worker_service.change_status(1, status="suspended", inactive_from=date(2100, 1, 1))

    assert worker.status == WorkerStatus.SUSPENDED
    assert worker.inactive_from == D


def test_unknown_status_and_worker(world):
    world.add_worker(1)
    with pytest.raises(ValidationError):
        world.worker_service.change_status(1, status="retired")
    with pytest.raises(NotFoundError):
        world.worker_service.change_status(9, status="active")
