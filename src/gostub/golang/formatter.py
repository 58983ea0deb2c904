import logging
import subprocess
from pathlib import Path
from typing import Optional

from gostub.spec import FormatterError

log = logging.getLogger(__name__)


class GoImportsFormatter:
    """Formats Go source with ``goimports`` read from stdin."""

    def __init__(self, command: str = "goimports", workdir: Optional[Path] = None):
        self.command = command
        self.workdir = workdir

    def process(self, source: str, srcdir: Optional[Path] = None) -> str:
        args = [self.command]
        if srcdir is not None:
            args += ["-srcdir", str(srcdir)]

        log.debug(f"Running {' '.join(args)}")
        try:
            result = subprocess.run(
                args,
                input=source,
                cwd=self.workdir,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            raise FormatterError(f"{self.command} not found: {e}") from e
        except subprocess.CalledProcessError as e:
            message = (e.stderr or "").strip()
            raise FormatterError(
                message or f"{self.command} exited with status {e.returncode}"
            ) from e
        return result.stdout
