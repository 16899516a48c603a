# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : executor.py
import signal
import subprocess
from dataclasses import dataclass

SUCCESS  = "success"
FAILED   = "failed"
ABNORMAL = "abnormal"

# exit code reported when the child was signaled or never started
ABNORMAL_EXIT = -1


@dataclass(frozen=True)
class TaskOutcome:
    """
    How a rank's command ended.

    Attributes:
    -----------
    status : str
        One of "success", "failed" or "abnormal".
    exit_code : int
        0, the child's own exit code, or -1 for abnormal endings.
    error : OSError
        The launch error, if the command could not be started at all.
    signum : int
        The signal that killed the child, if any.
    """
    status: str
    exit_code: int = 0
    error: OSError = None
    signum: int = None

    @classmethod
    def success(cls) -> "TaskOutcome":
        return cls(SUCCESS, 0)

    @classmethod
    def failed(cls, exit_code: int) -> "TaskOutcome":
        return cls(FAILED, exit_code)

    @classmethod
    def abnormal(cls, error: OSError = None, signum: int = None) -> "TaskOutcome":
        return cls(ABNORMAL, ABNORMAL_EXIT, error, signum)

    @property
    def ok(self) -> bool:
        return self.status == SUCCESS

    @property
    def diagnostic(self) -> str:
        """What the operating system says about how the command ended."""
        if self.error is not None:
            return self.error.strerror or str(self.error)
        if self.signum is not None:
            try:
                name = signal.Signals(self.signum).name
            except ValueError:
                name = str(self.signum)
            return f"terminated by signal {name}"
        if self.status == FAILED:
            return f"child exited with status {self.exit_code}"
        return "no error"


def classify(returncode: int) -> TaskOutcome:
    # subprocess reports death by signal N as -N
    if returncode == 0:
        return TaskOutcome.success()
    if returncode > 0:
        return TaskOutcome.failed(returncode)
    return TaskOutcome.abnormal(signum=-returncode)


def execute(assignment: str, rank: int, kind: str = "command", target: str = None) -> TaskOutcome:
    """
    Run `assignment` through the shell and wait for it.

    The string goes to /bin/sh as-is, so pipes, redirects and globs in a
    cmdfile line work the way they would in a terminal. The child inherits
    this rank's environment and working directory. An empty assignment is a
    no-op success.

    Parameters:
    -----------
    assignment : str
        The command line to run.
    rank : int
        This process's rank, used in the progress line.
    kind : str
        "command" or "script", used in the progress line.
    target : str
        What to name in the progress line (defaults to `assignment`).

    Returns:
    --------
    TaskOutcome
    """
    if not assignment:
        return TaskOutcome.success()

    # flush so lines from different ranks don't interleave mid-line
    print(f"Rank {rank} executing {kind}: {target or assignment}", flush=True)
    try:
        proc = subprocess.run(assignment, shell=True)
    except OSError as e:
        return TaskOutcome.abnormal(e)
    return classify(proc.returncode)
