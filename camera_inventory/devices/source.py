"""
Runs ffmpeg and captures the diagnostic text it writes to stderr.

ffmpeg has no query API for input devices, so the listings this package
parses are produced by invocations that are expected to fail. A non-zero
exit status is therefore normal here; only failing to start ffmpeg at all is
an error.
"""

import logging
import subprocess
import tempfile
from contextlib import contextmanager
from typing import IO, Iterator, List, Mapping, Optional, Sequence

from ..logger import TRACE
from .parsing import parse_input_formats

logger = logging.getLogger(__name__)


class InventoryError(Exception):
    """Base class for camera inventory errors."""


class BackendLaunchError(InventoryError):
    """ffmpeg could not be started, or did not finish in time."""

    def __init__(self, command: Sequence[str], reason: str):
        self.command = list(command)
        self.reason = reason
        super().__init__(f"Failed to run {' '.join(self.command)!r}: {reason}")


@contextmanager
def capture_sink() -> Iterator[IO[str]]:
    """Temporary file that receives one invocation's stderr, closed on exit."""
    sink = tempfile.TemporaryFile(mode="w+", encoding="utf-8", errors="replace")
    try:
        yield sink
    finally:
        sink.close()


class DiagnosticTextSource:
    """
    Invokes ffmpeg input devices and returns their diagnostic output.

    Each call is given its own sink, so nothing process-wide is redirected.
    """

    def __init__(self, binary: str = "ffmpeg", global_args: Optional[Sequence[str]] = None,
                 timeout_seconds: Optional[float] = None):
        self.binary = binary
        self.global_args = list(global_args) if global_args is not None else ["-hide_banner"]
        self.timeout_seconds = timeout_seconds

    def build_command(self, format: str, target: str, options: Mapping[str, str]) -> List[str]:
        command = [self.binary, *self.global_args, "-f", format]
        for key, value in options.items():
            command.extend([f"-{key}", str(value)])
        command.extend(["-i", target])
        return command

    def run(self, format: str, target: str, options: Mapping[str, str], sink: IO[str]) -> int:
        """
        Run one ffmpeg invocation with its stderr written to ``sink``.

        Returns:
            ffmpeg's exit status

        Raises:
            BackendLaunchError: If ffmpeg could not be started or timed out
        """
        command = self.build_command(format, target, options)
        logger.debug("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=sink,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise BackendLaunchError(command, f"timed out after {self.timeout_seconds}s")
        except OSError as e:
            raise BackendLaunchError(command, str(e)) from e

        logger.debug("%s exited with status %d", self.binary, result.returncode)
        return result.returncode

    def collect(self, format: str, target: str, options: Mapping[str, str]) -> List[str]:
        """Run one invocation and return its stderr lines."""
        with capture_sink() as sink:
            self.run(format, target, options, sink)
            sink.seek(0)
            lines = sink.read().splitlines()

        for line in lines:
            logger.log(TRACE, "%s: %s", format, line)
        return lines

    def list_input_formats(self) -> List[str]:
        """Names of the input devices ffmpeg was built with (``ffmpeg -devices``)."""
        command = [self.binary, "-hide_banner", "-devices"]
        try:
            result = subprocess.run(
                command,
                stdin=subprocess.DEVNULL,
                capture_output=True,
                text=True,
                timeout=self.timeout_seconds,
            )
        except subprocess.TimeoutExpired:
            raise BackendLaunchError(command, f"timed out after {self.timeout_seconds}s")
        except OSError as e:
            raise BackendLaunchError(command, str(e)) from e

        return parse_input_formats(result.stdout.splitlines())
