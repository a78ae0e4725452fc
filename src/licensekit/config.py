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

"""Configuration for the Gradle backend.

Settings come from an optional ``licensekit.toml`` at the project root
and may be overridden on the command line::

    [gradle]
    command = "./gradlew --offline"
    include_groups = true

Keys:

- ``command``: Build-tool command to run instead of the detected
  wrapper or system ``gradle``.
- ``include_groups``: Report ``group:artifact`` instead of the bare
  artifact name.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from licensekit._types import Platform
from licensekit.errors import ConfigError
from licensekit.logging import get_logger

log = get_logger('licensekit.config')

CONFIG_FILE_NAME = 'licensekit.toml'

_GRADLE_KEYS: frozenset[str] = frozenset({'command', 'include_groups'})


@dataclass(frozen=True)
class GradleConfig:
    """Settings for one Gradle discovery run.

    Attributes:
        project_path: Root directory of the Gradle build.
        command: Explicit build-tool command. ``None`` selects the
            wrapper script or system ``gradle`` automatically.
        include_groups: Qualify dependency names with their group id.
        platform: Platform used to pick wrapper and command names.
    """

    project_path: Path
    command: str | None = None
    include_groups: bool = False
    platform: Platform = field(default_factory=Platform.current)


def _parse_gradle(section: dict[str, Any]) -> dict[str, Any]:
    """Validate the ``[gradle]`` table and return its settings."""
    unknown = sorted(set(section) - _GRADLE_KEYS)
    if unknown:
        raise ConfigError(f'Unknown key(s) in [gradle]: {", ".join(unknown)}')

    settings: dict[str, Any] = {}
    if 'command' in section:
        command = section['command']
        if not isinstance(command, str) or not command.strip():
            raise ConfigError('gradle.command must be a non-empty string')
        settings['command'] = str(command)
    if 'include_groups' in section:
        include_groups = section['include_groups']
        if not isinstance(include_groups, bool):
            raise ConfigError('gradle.include_groups must be a boolean')
        settings['include_groups'] = bool(include_groups)
    return settings


def load_config(
    project_path: Path,
    config_path: Path | None = None,
    *,
    command: str | None = None,
    include_groups: bool | None = None,
    platform: Platform | None = None,
) -> GradleConfig:
    """Build a :class:`GradleConfig` from file settings and overrides.

    Args:
        project_path: Root directory of the Gradle build.
        config_path: Explicit config file. Defaults to
            ``<project_path>/licensekit.toml``; a missing default file
            means "use defaults", a missing explicit file is an error.
        command: Overrides ``gradle.command``.
        include_groups: Overrides ``gradle.include_groups``.
        platform: Overrides the detected host platform.

    Raises:
        ConfigError: If the file is unreadable TOML or has bad values.
    """
    project_path = Path(project_path)
    explicit = config_path is not None
    path = config_path if config_path is not None else project_path / CONFIG_FILE_NAME

    config = GradleConfig(project_path=project_path)
    if path.is_file():
        try:
            data = tomlkit.parse(path.read_text(encoding='utf-8')).unwrap()
        except tomlkit.exceptions.ParseError as exc:
            raise ConfigError(f'{path}: {exc}') from exc
        section = data.get('gradle', {})
        if not isinstance(section, dict):
            raise ConfigError(f'{path}: [gradle] must be a table')
        config = replace(config, **_parse_gradle(section))
        log.debug('config_loaded', path=str(path))
    elif explicit:
        raise ConfigError(f'Config file not found: {path}')

    overrides: dict[str, Any] = {}
    if command is not None:
        overrides['command'] = command
    if include_groups is not None:
        overrides['include_groups'] = include_groups
    if platform is not None:
        overrides['platform'] = platform
    return replace(config, **overrides)


__all__ = [
    'CONFIG_FILE_NAME',
    'GradleConfig',
    'load_config',
]
