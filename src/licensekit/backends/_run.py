# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Blocking shell command execution.

Package-manager backends talk to build tools through
:func:`run_command`, which takes a full shell command string (build
tools are often wrapper scripts such as ``./gradlew``), runs it in a
given directory and reports stdout, stderr and success.

The working directory is handed to the child process; the calling
process's own working directory is never changed.
"""

from __future__ import annotations

import os
import subprocess  # noqa: S404 - build tools are driven as subprocesses
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from licensekit._types import CommandResult
from licensekit.logging import get_logger

log = get_logger('licensekit.backends._run')


class CommandRunner(Protocol):
    """Callable signature shared by :func:`run_command` and test fakes."""

    def __call__(
        self,
        command: str,
        *,
        cwd: Path,
        env: Mapping[str, str] | None = None,
    ) -> CommandResult:
        """Run ``command`` in ``cwd`` with ``env`` overrides."""
        ...


def run_command(
    command: str,
    *,
    cwd: Path,
    env: Mapping[str, str] | None = None,
    timeout: float | None = None,
) -> CommandResult:
    """Run a shell command and capture its output.

    Args:
        command: Command line, interpreted by the system shell.
        cwd: Working directory for the child process.
        env: Variables layered over the current environment.
        timeout: Seconds before the child is killed. ``None`` waits
            indefinitely.

    Returns:
        A :class:`CommandResult`. A missing executable shows up as a
        non-success result with the shell's error on stderr.

    Raises:
        subprocess.TimeoutExpired: If ``timeout`` elapses.
    """
    child_env = {**os.environ, **(env or {})}
    log.debug('command_start', command=command, cwd=str(cwd), env=sorted((env or {}).keys()))
    proc = subprocess.run(  # noqa: S602 - command strings name wrapper scripts
        command,
        shell=True,
        cwd=cwd,
        env=child_env,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=False,
    )
    log.debug('command_done', command=command, returncode=proc.returncode)
    return CommandResult(
        stdout=proc.stdout or '',
        stderr=proc.stderr or '',
        succeeded=proc.returncode == 0,
    )


__all__ = [
    'CommandRunner',
    'run_command',
]
