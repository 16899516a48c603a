# Author      : Tyson Limato
# Date        : 2025-10-14
# File Name   : config.py
import os
from dataclasses import dataclass

MAX_LINE = 5000
MAX_COMMANDS = 5000


@dataclass(slots=True)
class Settings:
    """
    Limits applied while resolving assignments.

    Attributes:
    -----------
    max_line : int
        Longest command line, in UTF-8 bytes, kept from a cmdfile; longer
        ones are cut.
    max_commands : int
        Most cmdfile entries ever dispatched, whatever the number of ranks.
    wildcard : str
        The single character replaced by the rank in script patterns.
    interpreter : str
        Program used to run a matched script.
    """

    max_line: int = MAX_LINE
    max_commands: int = MAX_COMMANDS
    wildcard: str = "*"
    interpreter: str = "bash"

    @classmethod
    def from_env(cls) -> "Settings":
        """Load settings from the environment, falling back to the defaults."""
        return cls(
            max_line=int(os.getenv("RANK_RUN_MAX_LINE", str(MAX_LINE))),
            max_commands=int(os.getenv("RANK_RUN_MAX_COMMANDS", str(MAX_COMMANDS))),
            wildcard=os.getenv("RANK_RUN_WILDCARD", "*"),
            interpreter=os.getenv("RANK_RUN_INTERPRETER", "bash"),
        )

    def validate(self) -> None:
        if self.max_line <= 0:
            raise ValueError(f"RANK_RUN_MAX_LINE must be positive, got {self.max_line}")
        if self.max_commands <= 0:
            raise ValueError(
                f"RANK_RUN_MAX_COMMANDS must be positive, got {self.max_commands}"
            )
        if len(self.wildcard) != 1:
            raise ValueError(
                f"RANK_RUN_WILDCARD must be a single character, got {self.wildcard!r}"
            )
        if not self.interpreter.strip():
            raise ValueError("RANK_RUN_INTERPRETER must not be empty")
