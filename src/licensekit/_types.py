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

"""Shared leaf-level types used across licensekit.

This module must have **zero** imports from other ``licensekit``
subpackages to avoid circular-import chains.  It is safe to import
from any module in the project.
"""

from __future__ import annotations

import enum
import os
from dataclasses import dataclass, field

__all__ = [
    'UNKNOWN_LICENSE',
    'CommandResult',
    'DependencyRecord',
    'LicenseEntry',
    'Platform',
]

UNKNOWN_LICENSE = 'unknown'


class Platform(enum.Enum):
    """Host platform family, as far as command naming is concerned."""

    POSIX = 'posix'
    WINDOWS = 'windows'

    @classmethod
    def current(cls) -> Platform:
        """Return the platform of the running interpreter."""
        return cls.WINDOWS if os.name == 'nt' else cls.POSIX


@dataclass(frozen=True)
class CommandResult:
    """Outcome of one external command invocation.

    Attributes:
        stdout: Captured standard output, decoded as text.
        stderr: Captured standard error, decoded as text.
        succeeded: ``True`` if the command exited with status 0.
    """

    stdout: str
    stderr: str
    succeeded: bool


@dataclass(frozen=True)
class LicenseEntry:
    """A license declared for a dependency.

    Only ``name`` takes part in equality; two entries that differ in
    ``url`` alone are the same license.
    """

    name: str
    url: str = field(default='', compare=False)

    @classmethod
    def unknown(cls) -> LicenseEntry:
        """Placeholder used when a dependency declares no license."""
        return cls(name=UNKNOWN_LICENSE)


@dataclass(frozen=True)
class DependencyRecord:
    """One resolved dependency as reported by the build tool.

    Attributes:
        identity: Raw identity string, usually ``group:artifact:version``.
            Empty if the report carried no identity.
        name: Display name (artifact, or ``group:artifact``).
        licenses: Declared licenses, never empty.
        group: Group segment of ``identity`` (empty if absent).
        version: Version segment of ``identity`` (empty if absent).

    Equality and hashing use ``name`` and the ordered license names
    only, so records for the same artifact reported by two modules
    collapse into one.
    """

    identity: str = field(compare=False)
    name: str
    licenses: tuple[LicenseEntry, ...]
    group: str = field(default='', compare=False)
    version: str = field(default='', compare=False)

    def __post_init__(self) -> None:
        """Substitute the ``unknown`` license for an empty license list."""
        if not self.licenses:
            object.__setattr__(self, 'licenses', (LicenseEntry.unknown(),))

    @property
    def license_names(self) -> tuple[str, ...]:
        """Ordered license names, the part of a record that identifies it."""
        return tuple(lic.name for lic in self.licenses)
