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

"""Command-line entry point: ``licensekit [PROJECT] [options]``.

Exit codes: 0 on success, 1 when Gradle or a report fails, 2 when the
directory is not a Gradle build.
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console

from licensekit.backends.package_manager.gradle import GradlePackageManager
from licensekit.config import load_config
from licensekit.errors import LicenseKitError
from licensekit.logging import configure_logging, get_logger
from licensekit.report import dependencies_to_json, print_dependency_table

log = get_logger('licensekit.cli')


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='licensekit',
        description='List the dependencies of a Gradle build with their declared licenses.',
    )
    parser.add_argument('project', nargs='?', type=Path, default=Path('.'), help='Gradle project root.')
    parser.add_argument('--command', help='Gradle command to run instead of the detected wrapper or gradle.')
    parser.add_argument(
        '--include-groups',
        action='store_true',
        default=None,
        help='Report dependencies as group:artifact.',
    )
    parser.add_argument('--subprojects', action='store_true', help='List subproject directories and exit.')
    parser.add_argument('--format', choices=('table', 'json'), default='table', help='Output format.')
    parser.add_argument('--config', type=Path, help='Path to licensekit.toml.')
    verbosity = parser.add_mutually_exclusive_group()
    verbosity.add_argument('-v', '--verbose', action='store_true', help='Debug logging.')
    verbosity.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Emit logs as JSON lines.')
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the CLI and return the process exit code."""
    args = _build_parser().parse_args(argv)
    configure_logging(verbose=args.verbose, quiet=args.quiet, json_log=args.json_log)

    try:
        config = load_config(
            args.project,
            args.config,
            command=args.command,
            include_groups=args.include_groups,
        )
        manager = GradlePackageManager(config)
        if not manager.active():
            log.error('not_a_gradle_project', project=str(args.project))
            return 2

        if args.subprojects:
            for path in manager.subprojects():
                sys.stdout.write(f'{path}\n')
            return 0

        dependencies = manager.current_packages()
    except LicenseKitError as exc:
        log.error('discovery_failed', error=str(exc))
        return 1

    if args.format == 'json':
        sys.stdout.write(dependencies_to_json(dependencies) + '\n')
    else:
        print_dependency_table(dependencies, console=Console())
    return 0


__all__ = [
    'main',
]
