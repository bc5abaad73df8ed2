"""
Base class for configurable external binaries.

An ExternalBinary subclass declares its command-line arguments and options
as class attributes and builds its command from them:

    class Echo(ExternalBinary):
        message = Argument("message")
        newline = Option("-n", False)

        def get_command_array(self):
            return ["echo", self.message]

Arguments are required: reading one that has neither a default nor a value
raises ExternalBinaryArgumentMissingError. Options are optional: reading an
unset option returns None. Assigning None to either is ignored.

execute() runs the command in the working directory, merges stdout and
stderr into one file, enforces the timeout and optionally reuses the output
of an identical earlier command.
"""

import hashlib
import logging
import subprocess
import tempfile
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar, Union

from ..core.directory import ensure_directory, get_binaries_dir
from ..core.exceptions import (
    ExternalBinaryArgumentMissingError,
    ExternalBinaryNotFoundError,
)
from .result import TIMEOUT_EXIT_CODE, BinaryResult

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 60.0

B = TypeVar("B", bound="ExternalBinary")


class _Slot:
    """Named value slot of an ExternalBinary, stored in a per-instance map."""

    store_attr = ""

    def __init__(self, name: str, default: Any = None):
        self.name = name
        self.default = default
        self.attr_name: Optional[str] = None

    def __set_name__(self, owner, attr_name):
        self.attr_name = attr_name

    def _store(self, instance) -> Dict[str, Any]:
        return getattr(instance, self.store_attr)

    def __set__(self, instance, value):
        if value is not None:
            self._store(instance)[self.name] = value

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.name!r}, default={self.default!r})"


class Argument(_Slot):
    """
    Required argument of an external binary.

    Args:
        name: Argument name, unique within the binary
        default: Value used until one is assigned
    """

    store_attr = "all_arguments"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        value = self._store(instance).get(self.name)
        if value is None:
            raise ExternalBinaryArgumentMissingError(self.name)
        return value


class Option(_Slot):
    """
    Optional flag or value of an external binary.

    Args:
        name: Option name (usually the flag itself, e.g. '--pretty-print')
        default: Value used until one is assigned; None means unset
    """

    store_attr = "all_options"

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return self._store(instance).get(self.name)


class ExternalBinary(ABC):
    """
    Abstract executable that can be configured and run in a working directory.

    Attributes:
        all_arguments: Argument name -> value (None while unset)
        all_options: Option name -> value (unset options are absent)
        work_dir: Directory the process runs in and writes its output to.
            Defaults to <tempdir>/phpparsekit/binaries/<ClassName>
        timeout: Maximum run time in seconds
        cache_output: Reuse the output file of an identical earlier command
            instead of running it again
    """

    _arguments: Dict[str, Argument] = {}
    _options: Dict[str, Option] = {}

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        arguments = dict(cls._arguments)
        options = dict(cls._options)

        for slot in vars(cls).values():
            if not isinstance(slot, _Slot):
                continue
            if slot.name in arguments or slot.name in options:
                raise ValueError(
                    f"{cls.__name__} declares {slot.name!r} more than once"
                )
            if isinstance(slot, Argument):
                arguments[slot.name] = slot
            else:
                options[slot.name] = slot

        cls._arguments = arguments
        cls._options = options

    def __init__(
        self,
        work_dir: Optional[Union[str, Path]] = None,
        timeout: float = DEFAULT_TIMEOUT,
        cache_output: bool = False,
    ):
        self.all_arguments: Dict[str, Any] = {
            name: slot.default for name, slot in self._arguments.items()
        }
        self.all_options: Dict[str, Any] = {
            name: slot.default
            for name, slot in self._options.items()
            if slot.default is not None
        }
        self.work_dir = (
            Path(work_dir) if work_dir else get_binaries_dir(type(self).__name__)
        )
        self.timeout = timeout
        self.cache_output = cache_output

    @abstractmethod
    def get_command_array(self) -> List[str]:
        """
        Construct the command line for execution.

        Must be a pure function of the current arguments and options.

        Returns:
            Executable followed by its arguments
        """
        pass

    def cache_file_for(self, command: List[str]) -> Path:
        """
        Get the output file used for a command.

        The name is derived from a stable hash of the joined command, so an
        unchanged command always maps to the same file.
        """
        digest = hashlib.sha256(" ".join(command).encode("utf-8")).hexdigest()
        return self.work_dir / f".{digest[:16]}.cache"

    def execute(self) -> BinaryResult:
        """
        Run the command built by get_command_array().

        Returns:
            BinaryResult with the exit code and the output file. A non-zero
            exit code is returned, not raised. On timeout the process is
            killed and the result has code -1 and a file describing the
            timeout.

        Raises:
            ExternalBinaryNotFoundError: If the process cannot be started
        """
        ensure_directory(self.work_dir)
        command = self.get_command_array()
        output_file = self.cache_file_for(command)

        if self.cache_output and output_file.exists():
            logger.debug(f"Using cached output {output_file}")
            return BinaryResult(code=0, output=output_file)

        logger.debug(f"Running: {' '.join(command)} (cwd={self.work_dir})")

        with open(output_file, "wb") as out:
            try:
                process = subprocess.Popen(
                    command,
                    cwd=self.work_dir,
                    stdout=out,
                    stderr=subprocess.STDOUT,
                    stdin=subprocess.DEVNULL,
                )
            except OSError as e:
                # No output file may outlive a command that never ran
                out.close()
                output_file.unlink(missing_ok=True)
                raise ExternalBinaryNotFoundError(command[0], str(e)) from e

            with process:
                try:
                    code = process.wait(timeout=self.timeout)
                except subprocess.TimeoutExpired:
                    process.kill()
                    process.wait()
                    return self._timeout_result(command)

        logger.debug(f"{command[0]} exited with code {code}")
        return BinaryResult(code=code, output=output_file)

    def _timeout_result(self, command: List[str]) -> BinaryResult:
        minutes = self.timeout / 60
        logger.warning(f"{command[0]} timed out after {self.timeout:g}s")
        fd, path = tempfile.mkstemp(prefix="phpparsekit_", suffix=".timeout")
        with open(fd, "w", encoding="utf-8") as f:
            f.write(
                f"Process timed out after {minutes:g} minutes "
                f"({self.timeout:g} seconds): {' '.join(command)}\n"
            )
        return BinaryResult(code=TIMEOUT_EXIT_CODE, output=Path(path))

    @contextmanager
    def temporary_config(self: B) -> Iterator[B]:
        """
        Restore arguments and options on exit.

        Anything changed inside the block, including options that were
        unset before it, is reverted even if the block raises.

        Example:
            >>> with parser.temporary_config():
            ...     parser.do_pretty_print = True
            ...     result = parser.execute()
        """
        arguments_backup = dict(self.all_arguments)
        options_backup = dict(self.all_options)
        try:
            yield self
        finally:
            self.all_arguments.clear()
            self.all_arguments.update(arguments_backup)
            self.all_options.clear()
            self.all_options.update(options_backup)

    def execute_with(self: B, overrides: Callable[[B], None]) -> BinaryResult:
        """
        Execute once with temporary changes to the configuration.

        Args:
            overrides: Called with this binary to apply one-off changes

        Returns:
            BinaryResult of the execution

        Example:
            >>> parser.execute_with(lambda p: setattr(p, "dump_type", DumpType.JSON))
        """
        with self.temporary_config():
            overrides(self)
            return self.execute()


__all__ = [
    "DEFAULT_TIMEOUT",
    "Argument",
    "Option",
    "ExternalBinary",
]
