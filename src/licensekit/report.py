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

"""Rendering of discovered dependencies.

Usage::

    from licensekit.report import print_dependency_table

    print_dependency_table(manager.current_packages())
"""

from __future__ import annotations

import json
from io import StringIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from licensekit._types import UNKNOWN_LICENSE, DependencyRecord


def print_dependency_table(
    dependencies: list[DependencyRecord],
    console: Console | None = None,
) -> None:
    """Print dependencies and their licenses as a Rich table.

    Dependencies without a declared license are highlighted.

    Args:
        dependencies: Records to show, in the given order.
        console: Rich :class:`Console` to print to.  When ``None``,
            a default ``Console()`` is created (auto-detects TTY).
    """
    if console is None:
        console = Console()

    table = Table(
        show_header=True,
        header_style='bold',
        show_edge=False,
        pad_edge=False,
        expand=True,
    )
    table.add_column('Name', min_width=20, style='bold')
    table.add_column('Identity', ratio=2, style='dim')
    table.add_column('Licenses', ratio=3)

    for dep in dependencies:
        names = ', '.join(dep.license_names)
        style = 'yellow' if dep.license_names == (UNKNOWN_LICENSE,) else ''
        table.add_row(dep.name or '-', dep.identity, Text(names, style=style))

    console.print(table)

    unknown = sum(1 for dep in dependencies if dep.license_names == (UNKNOWN_LICENSE,))
    if unknown:
        console.print(f'\n{len(dependencies)} dependencies, [bold yellow]{unknown} without a declared license[/].')
    else:
        console.print(f'\n[bold green]{len(dependencies)} dependencies.[/]')


def format_dependency_table(
    dependencies: list[DependencyRecord],
    *,
    color: bool = False,
) -> str:
    """Format dependencies as a string.

    Thin wrapper around :func:`print_dependency_table` that captures
    the Rich output.  Useful for tests and non-interactive callers.
    """
    buf = StringIO()
    console = Console(file=buf, force_terminal=color, width=120)
    print_dependency_table(dependencies, console=console)
    return buf.getvalue().rstrip('\n')


def dependencies_to_json(dependencies: list[DependencyRecord], *, indent: int = 2) -> str:
    """Serialize dependencies to JSON.

    Args:
        dependencies: Records to serialize.
        indent: JSON indentation level.

    Returns:
        JSON string.
    """
    records = [
        {
            'name': dep.name,
            'identity': dep.identity,
            'group': dep.group,
            'version': dep.version,
            'licenses': [{'name': lic.name, 'url': lic.url} for lic in dep.licenses],
        }
        for dep in dependencies
    ]
    return json.dumps(records, indent=indent)


__all__ = [
    'dependencies_to_json',
    'format_dependency_table',
    'print_dependency_table',
]
