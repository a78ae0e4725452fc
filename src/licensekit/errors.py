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

"""Exception hierarchy for licensekit.

Every error raised on purpose by licensekit derives from
:class:`LicenseKitError`, so callers can catch one type and still get
a descriptive message.  None of these are retried or recovered from
inside licensekit; a failed discovery never returns partial results.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    'ConfigError',
    'ExternalCommandFailure',
    'LicenseKitError',
    'MalformedReportFailure',
]


class LicenseKitError(Exception):
    """Base class for licensekit errors."""


class ExternalCommandFailure(LicenseKitError):
    """Raised when an external command exits unsuccessfully.

    Attributes:
        command: The exact command string that was run.
        stderr: Captured standard error, verbatim.
    """

    def __init__(self, command: str, stderr: str) -> None:
        """Initialize with the failed command and its stderr."""
        self.command = command
        self.stderr = stderr
        super().__init__(f"Command '{command}' failed to execute: {stderr}")


class MalformedReportFailure(LicenseKitError):
    """Raised when a generated license report cannot be read.

    Attributes:
        path: Report file that failed to parse.
        detail: Human-readable description of the problem.
    """

    def __init__(self, path: Path | str, detail: str) -> None:
        """Initialize with the report path and problem description."""
        self.path = Path(path)
        self.detail = detail
        super().__init__(f'Malformed license report {self.path}: {detail}')


class ConfigError(LicenseKitError):
    """Raised when ``licensekit.toml`` contains invalid settings."""
