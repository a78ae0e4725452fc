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

r"""Package-manager backends for licensekit.

A package-manager backend knows how to tell whether a project uses its
ecosystem (:meth:`PackageManager.active`) and how to list the
project's third-party dependencies with their declared licenses
(:meth:`PackageManager.current_packages`).

Layout::

    backends/package_manager/
    ├── __init__.py        ← PackageManager base class
    ├── gradle.py          ← GradlePackageManager
    └── _gradle_report.py  ← dependency-license.xml discovery and parsing
"""

from __future__ import annotations

from pathlib import Path

from licensekit._types import DependencyRecord


class PackageManager:
    """Base class for package-manager backends.

    Subclasses implement :meth:`detected_package_path` (the file whose
    presence marks the project as theirs) and :meth:`current_packages`.
    """

    package_manager: str = ''

    def __init__(self, project_path: Path) -> None:
        """Bind the backend to a project root."""
        self._project_path = Path(project_path)

    @property
    def project_path(self) -> Path:
        """Root directory of the project being inspected."""
        return self._project_path

    def detected_package_path(self) -> Path:
        """Return the manifest path that marks this ecosystem as in use."""
        raise NotImplementedError

    def active(self) -> bool:
        """``True`` if the project's manifest exists."""
        return self.detected_package_path().exists()

    def current_packages(self) -> list[DependencyRecord]:
        """Return the project's dependencies with their licenses."""
        raise NotImplementedError


__all__ = [
    'PackageManager',
]
