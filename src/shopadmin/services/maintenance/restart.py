"""Process restart primitive."""

from __future__ import annotations

import os
import signal
import sys
from typing import TYPE_CHECKING

from shopadmin.core.config import RestartStrategy
from shopadmin.observability.logging import get_logger, logger as root_logger
from shopadmin.services.maintenance.exceptions import RestartError


if TYPE_CHECKING:
    from collections.abc import Sequence

logger = get_logger(__name__)


class ProcessRestarter:
    """Restarts the running application.

    Strategies:
    - exec: replace this process with a fresh interpreter running the same
      command line
    - signal: ask the parent process (gunicorn master) to reload its workers
    - terminate: stop this process and rely on the supervisor to start it
    """

    def __init__(
        self,
        strategy: RestartStrategy = RestartStrategy.EXEC,
        argv: Sequence[str] | None = None,
    ) -> None:
        self.strategy = RestartStrategy(strategy)
        self._argv = list(argv) if argv is not None else None

    @property
    def command(self) -> list[str]:
        argv = self._argv if self._argv is not None else sys.argv
        return [sys.executable, *argv]

    def restart(self) -> None:
        """Restart the process using the configured strategy.

        With the exec strategy this call does not return on success.

        Raises:
            RestartError: If the operating system rejects the request.
        """
        logger.warning("Restarting application", strategy=self.strategy.value)
        root_logger.complete()

        try:
            if self.strategy == RestartStrategy.EXEC:
                command = self.command
                os.execv(command[0], command)  # noqa: S606
            elif self.strategy == RestartStrategy.SIGNAL:
                os.kill(os.getppid(), signal.SIGHUP)
            else:
                os.kill(os.getpid(), signal.SIGTERM)
        except OSError as e:
            logger.exception("Application restart failed", strategy=self.strategy.value)
            raise RestartError(self.strategy.value, str(e)) from e
