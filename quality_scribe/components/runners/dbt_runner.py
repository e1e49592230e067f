"""
This module provides `DbtTestRunner`, which delegates execution of generated
tests to an external test tool (`dbt test` by default).

The tool is run as a subprocess against a project directory. Its standard
streams are captured in full and returned together with the exit code once
the process terminates. Output is decoded as UTF-8; undecodable bytes are
replaced rather than failing a run that has already completed. A failing
test run (nonzero exit code) is a normal `RunOutcome`; only a process that
cannot be started raises `LaunchError`.

Known limitation: no timeout is applied. A hung subprocess blocks the caller
until it exits.
"""

import os
import subprocess
from typing import List, Optional

from quality_scribe.core.exceptions import LaunchError, ValidationError
from quality_scribe.core.models import RunOutcome
from quality_scribe.utils.logger import get_logger

logger = get_logger(__name__)

DEFAULT_COMMAND = ["dbt", "test"]


class DbtTestRunner:
    """
    Runs the configured test command inside a project directory.

    The runner holds no per-run state, so one instance can serve any number of
    sequential or concurrent calls.
    """

    def __init__(
        self,
        command: Optional[List[str]] = None,
        pass_project_dir: bool = True,
    ):
        """
        Args:
            command: The argv prefix of the test tool. Defaults to `dbt test`.
            pass_project_dir: Whether to append `--project-dir <path>` to the
                              command. Disable for tools that only rely on the
                              working directory.
        """
        self.command = list(command or DEFAULT_COMMAND)
        self.pass_project_dir = pass_project_dir

    def build_command(self, project_path: str) -> List[str]:
        argv = list(self.command)
        if self.pass_project_dir:
            argv += ["--project-dir", project_path]
        return argv

    def run_tests(self, project_path: str) -> RunOutcome:
        """
        Runs the test tool against `project_path` and waits for it to exit.

        Args:
            project_path: The project directory, resolved against the current
                          working directory. It is passed to the tool as an
                          absolute path and used as its working directory.

        Returns:
            A `RunOutcome` with the exit code and captured stdout/stderr.

        Raises:
            ValidationError: If `project_path` is empty.
            LaunchError: If the process cannot be started (missing executable,
                         missing project directory, permission denied).
        """
        if not project_path:
            raise ValidationError("Project path is required")

        project_dir = os.path.abspath(os.fspath(project_path))
        argv = self.build_command(project_dir)
        logger.info(f"Launching test runner: {' '.join(argv)}")
        try:
            result = subprocess.run(
                argv,
                cwd=project_dir,
                capture_output=True,
                encoding="utf-8",
                errors="replace",
            )
        except OSError as e:
            logger.error(f"Failed to launch test runner: {e}", exc_info=True)
            raise LaunchError(
                f"Failed to launch '{argv[0]}' in '{project_path}': {e}"
            ) from e

        logger.info(f"Test runner exited with code {result.returncode}.")
        return RunOutcome(
            exit_code=result.returncode,
            stdout=result.stdout,
            stderr=result.stderr,
        )
