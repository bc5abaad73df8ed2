"""
Result of running an external binary.
"""

from dataclasses import dataclass
from pathlib import Path

TIMEOUT_EXIT_CODE = -1


@dataclass(frozen=True)
class BinaryResult:
    """
    Exit code and output location of one execution.

    Attributes:
        code: Process exit code; 0 is success, -1 means the process timed out
        output: File holding the merged stdout/stderr of the process, or the
            timeout message when code is -1
    """

    code: int
    output: Path

    @property
    def succeeded(self) -> bool:
        return self.code == 0

    @property
    def timed_out(self) -> bool:
        return self.code == TIMEOUT_EXIT_CODE

    def read_text(self, encoding: str = "utf-8") -> str:
        """Read the output file as text."""
        return Path(self.output).read_text(encoding=encoding, errors="replace")
