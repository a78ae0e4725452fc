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

"""Gradle license report discovery and parsing.

The ``downloadLicenses`` task (from the Gradle license plugin) writes a
``dependency-license.xml`` file into each module's build directory::

    <dependencies>
      <dependency name="org.springframework:spring-core:4.0.1.RELEASE">
        <file>spring-core-4.0.1.RELEASE.jar</file>
        <license name="The Apache Software License, Version 2.0"
                 url="http://www.apache.org/licenses/LICENSE-2.0.txt"/>
      </dependency>
    </dependencies>

This module finds those files, turns each ``<dependency>`` into a
:class:`~licensekit._types.DependencyRecord`, and collapses records
that several modules report for the same artifact.
"""

from __future__ import annotations

import re
import xml.etree.ElementTree as ET  # noqa: S405 - reports are produced locally by the build
from collections.abc import Iterable
from pathlib import Path

from licensekit._types import DependencyRecord, LicenseEntry
from licensekit.errors import MalformedReportFailure
from licensekit.logging import get_logger

log = get_logger('licensekit.backends.package_manager._gradle_report')

REPORT_FILE_NAME = 'dependency-license.xml'

# The plugin emits control characters as numeric character references,
# which XML 1.0 forbids; they are dropped before parsing.
_CHAR_REF_RE = re.compile(r'&#[0-9]+;')
_CHAR_REF_BYTES_RE = re.compile(rb'&#[0-9]+;')


def _fromstring(data: str | bytes) -> ET.Element:
    """Parse report XML with expat's default settings.

    Bytes are decoded by expat using the encoding the document
    declares (UTF-8 if it declares none).
    """
    return ET.fromstring(data, parser=ET.XMLParser())  # noqa: S314


def find_report_files(project_path: Path) -> list[Path]:
    """Return every generated license report under ``project_path``.

    Zero reports is not an error; the caller ends up with an empty
    dependency list.
    """
    reports = sorted(p for p in Path(project_path).rglob(REPORT_FILE_NAME) if p.is_file())
    log.debug('gradle_reports_found', project=str(project_path), count=len(reports))
    return reports


def split_identity(identity: str) -> tuple[str, str, str]:
    """Split ``group:artifact:version`` into its three segments.

    Missing segments come back as empty strings.  A bare value with no
    colon is treated as the artifact.
    """
    if not identity:
        return '', '', ''
    parts = identity.split(':')
    if len(parts) == 1:
        return '', parts[0], ''
    version = parts[2] if len(parts) > 2 else ''  # noqa: PLR2004
    return parts[0], parts[1], version


def dependency_from_element(elem: ET.Element, *, include_groups: bool = False) -> DependencyRecord:
    """Build a record from one ``<dependency>`` element."""
    identity = elem.get('name', '')
    group, artifact, version = split_identity(identity)
    name = f'{group}:{artifact}' if include_groups and group else artifact

    licenses = tuple(
        LicenseEntry(name=lic.get('name', ''), url=lic.get('url', '')) for lic in elem.findall('license')
    )
    return DependencyRecord(
        identity=identity,
        name=name,
        licenses=licenses,
        group=group,
        version=version,
    )


def parse_report_text(
    text: str | bytes,
    *,
    source: Path | str = '<string>',
    include_groups: bool = False,
) -> list[DependencyRecord]:
    """Parse the contents of a license report.

    Args:
        text: Raw XML, either decoded text or the undecoded file
            contents.  Bytes are decoded per the XML declaration.
        source: Where the text came from, for error messages.
        include_groups: Qualify display names with the group id.

    Returns:
        Records in document order, duplicates included.

    Raises:
        MalformedReportFailure: If the XML is not well formed, uses an
            encoding expat cannot decode, or has no ``<dependencies>``
            grouping.
    """
    if isinstance(text, bytes):
        cleaned: str | bytes = _CHAR_REF_BYTES_RE.sub(b'', text)
    else:
        cleaned = _CHAR_REF_RE.sub('', text)
    try:
        root = _fromstring(cleaned)
    except (ET.ParseError, LookupError, ValueError) as exc:
        raise MalformedReportFailure(source, str(exc)) from exc

    grouping = root if root.tag == 'dependencies' else root.find('dependencies')
    if grouping is None:
        raise MalformedReportFailure(source, f'expected a <dependencies> element, found <{root.tag}>')

    return [dependency_from_element(dep, include_groups=include_groups) for dep in grouping.findall('dependency')]


def parse_report(path: Path, *, include_groups: bool = False) -> list[DependencyRecord]:
    """Parse one ``dependency-license.xml`` file in its declared encoding."""
    records = parse_report_text(Path(path).read_bytes(), source=path, include_groups=include_groups)
    log.debug('gradle_report_parsed', path=str(path), dependencies=len(records))
    return records


def deduplicate_dependencies(records: Iterable[DependencyRecord]) -> list[DependencyRecord]:
    """Drop repeated records, keeping the first occurrence of each.

    Two records are the same when their display names and ordered
    license names match (see :class:`DependencyRecord` equality).
    """
    seen: set[DependencyRecord] = set()
    unique: list[DependencyRecord] = []
    for record in records:
        if record in seen:
            continue
        seen.add(record)
        unique.append(record)
    return unique


__all__ = [
    'REPORT_FILE_NAME',
    'deduplicate_dependencies',
    'dependency_from_element',
    'find_report_files',
    'parse_report',
    'parse_report_text',
    'split_identity',
]
