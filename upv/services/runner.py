"""
Execution of external Windows utilities.
"""

import subprocess
from typing import Iterable, Optional, Sequence

from upv.core.exceptions import CommandNotFoundError
from upv.core.models import CommandResult
from upv.utils.logger import get_logger

logger = get_logger(__name__)

MASK = "********"


class CommandRunner:
    """Run external commands synchronously and capture their output.

    Console utilities such as ``net`` and ``rasdial`` write in the OEM code
    page, so output that is not valid UTF-8 is decoded with
    ``fallback_encoding``.
    """

    def __init__(self, fallback_encoding: str = "cp850"):
        self.fallback_encoding = fallback_encoding

    def run(
        self,
        args: Sequence[str],
        input: Optional[str] = None,
        secrets: Iterable[str] = (),
    ) -> CommandResult:
        """
        Execute a command and wait for it to finish.

        Args:
            args: Program and arguments
            input: Text written to the program's stdin. When omitted stdin is
                closed, so interactive confirmations read end-of-file.
            secrets: Values masked in log output

        Returns:
            CommandResult with decoded output

        Raises:
            CommandNotFoundError: If the program cannot be executed
        """
        args = [str(arg) for arg in args]
        logger.debug(f"Running: {' '.join(self._mask(args, secrets))}")

        try:
            completed = subprocess.run(
                args,
                input=input.encode("utf-8") if input is not None else None,
                stdin=None if input is not None else subprocess.DEVNULL,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                check=False,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(args[0]) from e

        result = CommandResult(
            args=self._mask(args, secrets),
            returncode=completed.returncode,
            stdout=self.decode(completed.stdout),
            stderr=self.decode(completed.stderr),
        )
        logger.debug(f"Exit status {result.returncode} from {args[0]}")
        if result.stdout.strip():
            logger.debug(f"stdout: {result.stdout.strip()}")
        if result.stderr.strip():
            logger.debug(f"stderr: {result.stderr.strip()}")
        return result

    def spawn(self, args: Sequence[str]) -> None:
        """Start a program without waiting for it (e.g. the file browser)."""
        args = [str(arg) for arg in args]
        logger.debug(f"Spawning: {' '.join(args)}")
        try:
            subprocess.Popen(
                args,
                stdin=subprocess.DEVNULL,
                stdout=subprocess.DEVNULL,
                stderr=subprocess.DEVNULL,
            )
        except FileNotFoundError as e:
            raise CommandNotFoundError(args[0]) from e

    def decode(self, data: Optional[bytes]) -> str:
        if not data:
            return ""
        try:
            return data.decode("utf-8")
        except UnicodeDecodeError:
            return data.decode(self.fallback_encoding, errors="replace")

    @staticmethod
    def _mask(args: Sequence[str], secrets: Iterable[str]) -> list[str]:
        hidden = {s for s in secrets if s}
        return [MASK if arg in hidden else arg for arg in args]
