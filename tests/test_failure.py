from __future__ import annotations

import pytest

from conftest import Aborted
from executor import TaskOutcome
from failure import propagate


def test_failed_command_aborts_group_with_its_exit_code(world, capsys) -> None:
    group = world(4)

    with pytest.raises(Aborted) as exc:
        propagate(group.manager(2), TaskOutcome.failed(7), "exit 7")

    assert exc.value.errorcode == 7
    assert group.aborts == [(2, 7)]
    err = capsys.readouterr().err.splitlines()
    assert err == [
        "Rank 2: command failed (exit code 7): exit 7",
        "system: child exited with status 7",
    ]


def test_abnormal_outcome_aborts_with_sentinel_and_reports_system_error(world, capsys) -> None:
    group = world(2)
    outcome = TaskOutcome.abnormal(OSError(12, "Cannot allocate memory"))

    with pytest.raises(Aborted):
        propagate(group.manager(0), outcome, "echo x")

    assert group.aborts == [(0, -1)]
    err = capsys.readouterr().err.splitlines()
    assert err == [
        "Rank 0: command failed (exit code -1): echo x",
        "system: Cannot allocate memory",
    ]


def test_signaled_command_reports_the_signal(world, capsys) -> None:
    group = world(1)

    with pytest.raises(Aborted):
        propagate(group.manager(0), TaskOutcome.abnormal(signum=9), "sleep 100")

    assert group.aborts == [(0, -1)]
    assert capsys.readouterr().err.splitlines()[-1] == "system: terminated by signal SIGKILL"
