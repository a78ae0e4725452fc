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

"""Gradle package-manager backend for licensekit.

The :class:`GradlePackageManager` drives Gradle as an external process
to find a build's subprojects and the licenses of its dependencies.

Project layout::

    project/
    ├── gradlew              ← wrapper script (preferred when present)
    ├── settings.gradle      ← may redirect rootProject.buildFileName
    ├── build.gradle(.kts)   ← root build file
    ├── submodule-1/
    │   └── build/reports/license/dependency-license.xml
    └── submodule-2/
        └── build/reports/license/dependency-license.xml

Command selection:

    1. ``command`` from configuration, verbatim.
    2. The wrapper (``./gradlew`` or ``gradlew.bat``) if it exists.
    3. The system command (``gradle`` or ``gradle.bat``).

Subprojects are read from ``gradle properties`` output::

    subprojects: [project ':submodule-1', project ':submodule-2']

followed by one ``gradle :<name>:properties`` query per subproject,
batched into a single invocation, whose ``projectDir:`` lines give the
directories.  Line filtering is done here rather than with ``grep`` so
hosts without it still work.

Dependencies come from the ``downloadLicenses`` task, whose XML
reports are parsed by :mod:`._gradle_report`.
"""

from __future__ import annotations

import re
import shutil
from collections.abc import Callable
from pathlib import Path

from licensekit._types import CommandResult, DependencyRecord, Platform
from licensekit.backends._run import CommandRunner, run_command
from licensekit.backends.package_manager import PackageManager
from licensekit.backends.package_manager._gradle_report import (
    deduplicate_dependencies,
    find_report_files,
    parse_report,
)
from licensekit.config import GradleConfig
from licensekit.errors import ExternalCommandFailure
from licensekit.logging import get_logger

log = get_logger('licensekit.backends.package_manager.gradle')

SETTINGS_FILE = 'settings.gradle'
BUILD_FILE = 'build.gradle'
KOTLIN_BUILD_FILE = 'build.gradle.kts'

_WRAPPER_NAMES: dict[Platform, str] = {
    Platform.POSIX: './gradlew',
    Platform.WINDOWS: 'gradlew.bat',
}
_SYSTEM_NAMES: dict[Platform, str] = {
    Platform.POSIX: 'gradle',
    Platform.WINDOWS: 'gradle.bat',
}

_BUILD_FILE_DIRECTIVE_RE = re.compile(r"""rootProject.buildFileName = ['"](?P<build_file>.*)['"]""")

# Everything around the names in "subprojects: [project ':a', project ':b']".
# Names that themselves contain these tokens are mangled.
_SUBPROJECT_NOISE_RE = re.compile(r"""\s|subprojects:|project|\[|\]|'|:""")

_SUBPROJECTS_LABEL = 'subprojects: '
_PROJECT_DIR_LABEL = 'projectDir: '
_PATH_SEPARATORS = frozenset('/\\')

ReportFinder = Callable[[Path], list[Path]]


def wrapper_name(platform: Platform) -> str:
    """Return the wrapper script name Gradle generates on ``platform``."""
    return _WRAPPER_NAMES[platform]


def system_command_name(platform: Platform) -> str:
    """Return the system-installed Gradle command name on ``platform``."""
    return _SYSTEM_NAMES[platform]


def build_file_from_settings(project_path: Path) -> Path | None:
    """Return the build file named by ``settings.gradle``, if any.

    Looks for ``rootProject.buildFileName = '<name>'`` (single or
    double quotes).  The returned path is not checked for existence.
    """
    settings_path = project_path / SETTINGS_FILE
    if not settings_path.is_file():
        return None
    # Gradle reads settings scripts as UTF-8.
    settings = settings_path.read_bytes().decode('utf-8', errors='replace')
    match = _BUILD_FILE_DIRECTIVE_RE.search(settings)
    if match is None:
        return None
    return project_path / match.group('build_file')


def parse_subproject_names(stdout: str) -> list[str]:
    """Extract subproject names from ``gradle properties`` output."""
    line = next((ln for ln in stdout.splitlines() if _SUBPROJECTS_LABEL in ln), '')
    stripped = _SUBPROJECT_NOISE_RE.sub('', line)
    return [name for name in stripped.split(',') if name]


def parse_project_dirs(stdout: str) -> list[str]:
    """Extract ``projectDir`` values, in emitted order."""
    return [ln.replace(_PROJECT_DIR_LABEL, '') for ln in stdout.splitlines() if 'projectDir' in ln]


class GradlePackageManager(PackageManager):
    """:class:`PackageManager` implementation for Gradle builds.

    Args:
        config: Project root, command override and naming options.
        runner: Executes shell commands. Defaults to
            :func:`~licensekit.backends._run.run_command`.
        report_finder: Lists generated license reports under the
            project root. Defaults to
            :func:`~licensekit.backends.package_manager._gradle_report.find_report_files`.
    """

    package_manager = 'Gradle'

    def __init__(
        self,
        config: GradleConfig,
        *,
        runner: CommandRunner = run_command,
        report_finder: ReportFinder = find_report_files,
    ) -> None:
        """Initialize with configuration and collaborators."""
        super().__init__(config.project_path)
        self._config = config
        self._runner = runner
        self._report_finder = report_finder

    @property
    def command(self) -> str:
        """The Gradle command every invocation starts with."""
        return self._config.command or self.package_management_command()

    def package_management_command(self) -> str:
        """Return the wrapper script if present, else the system command."""
        wrapper = wrapper_name(self._config.platform)
        if (self.project_path / wrapper).exists():
            return wrapper
        return system_command_name(self._config.platform)

    def detected_package_path(self) -> Path:
        """Return the build file that marks this project as Gradle.

        Decision order: a ``settings.gradle`` redirect, then
        ``build.gradle.kts`` if it exists, then ``build.gradle``.
        """
        alternate = build_file_from_settings(self.project_path)
        if alternate is not None:
            return alternate
        kotlin_build_file = self.project_path / KOTLIN_BUILD_FILE
        if kotlin_build_file.exists():
            return kotlin_build_file
        return self.project_path / BUILD_FILE

    def installed(self) -> bool:
        """``True`` if the Gradle command can be run from the project."""
        command = self.command
        if command == wrapper_name(self._config.platform):
            found = (self.project_path / command).is_file()
        else:
            executable, *_ = command.split() or [command]
            if _PATH_SEPARATORS & set(executable):
                # Relative to the project root, like the wrapper.
                executable = str(self.project_path / executable)
            found = shutil.which(executable) is not None
        if not found:
            log.warning('gradle_not_installed', command=command, project=str(self.project_path))
        return found

    def _run(self, command: str, *, env: dict[str, str] | None = None) -> CommandResult:
        """Run ``command`` in the project root, raising on failure."""
        result = self._runner(command, cwd=self.project_path, env=env)
        if not result.succeeded:
            log.warning('gradle_command_failed', command=command, stderr=result.stderr)
            raise ExternalCommandFailure(command, result.stderr)
        return result

    def subprojects(self) -> list[str]:
        """Return the root directory of every configured subproject.

        Returns an empty list when the build declares none; in that
        case Gradle is only invoked once.

        Raises:
            ExternalCommandFailure: If either Gradle query fails.
        """
        names = parse_subproject_names(self._run(f'{self.command} properties').stdout)
        if not names:
            log.info('gradle_no_subprojects', project=str(self.project_path))
            return []

        properties = ' '.join(f':{name}:properties' for name in names)
        paths = parse_project_dirs(self._run(f'{self.command} {properties}').stdout)
        log.info('gradle_subprojects_discovered', count=len(paths), subprojects=names)
        return paths

    def current_packages(self) -> list[DependencyRecord]:
        """Generate license reports and return the deduplicated dependencies.

        Raises:
            ExternalCommandFailure: If ``downloadLicenses`` fails.
            MalformedReportFailure: If a generated report is unreadable.
        """
        self._run(f'{self.command} downloadLicenses', env={'TERM': 'dumb'})

        records: list[DependencyRecord] = []
        for report in self._report_finder(self.project_path):
            records.extend(parse_report(report, include_groups=self._config.include_groups))

        packages = deduplicate_dependencies(records)
        log.info(
            'gradle_dependencies_discovered',
            project=str(self.project_path),
            reported=len(records),
            unique=len(packages),
        )
        return packages


__all__ = [
    'GradlePackageManager',
    'build_file_from_settings',
    'parse_project_dirs',
    'parse_subproject_names',
    'system_command_name',
    'wrapper_name',
]
