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

"""Tests for Gradle license report discovery, parsing and deduplication."""

from __future__ import annotations

from pathlib import Path

import pytest
from licensekit._types import DependencyRecord, LicenseEntry
from licensekit.backends.package_manager._gradle_report import (
    deduplicate_dependencies,
    find_report_files,
    parse_report,
    parse_report_text,
    split_identity,
)
from licensekit.errors import MalformedReportFailure
from licensekit.logging import configure_logging

configure_logging(quiet=True)

_PLUGIN_REPORT = """<?xml version="1.0" encoding="UTF-8"?>
<dependencies>
  <dependency name="org.springframework:spring-core:4.0.1.RELEASE">
    <file>spring-core-4.0.1.RELEASE.jar</file>
    <license name="The Apache Software License, Version 2.0"
             url="http://www.apache.org/licenses/LICENSE-2.0.txt"/>
  </dependency>
  <dependency name="junit:junit:4.12">
    <file>junit-4.12.jar</file>
    <license name="Eclipse Public License 1.0" url="http://www.eclipse.org/legal/epl-v10.html"/>
  </dependency>
</dependencies>
"""


def _dep(name: str, *licenses: str) -> DependencyRecord:
    return DependencyRecord(
        identity=f'g:{name}:1',
        name=name,
        licenses=tuple(LicenseEntry(n) for n in licenses),
    )


class TestSplitIdentity:
    """Tests for split_identity()."""

    def test_full_coordinates(self) -> None:
        """group:artifact:version splits into three parts."""
        assert split_identity('org.example:foo:1.0') == ('org.example', 'foo', '1.0')

    def test_empty(self) -> None:
        """Empty identity gives empty parts."""
        assert split_identity('') == ('', '', '')

    def test_bare_artifact(self) -> None:
        """A value without colons is the artifact."""
        assert split_identity('foo') == ('', 'foo', '')

    def test_classifier_ignored(self) -> None:
        """Segments after the version are not part of the version."""
        assert split_identity('g:a:1.0:jdk8') == ('g', 'a', '1.0')


class TestParseReportText:
    """Tests for parse_report_text()."""

    def test_plugin_output(self) -> None:
        """A typical plugin report parses into records with license urls."""
        deps = parse_report_text(_PLUGIN_REPORT)
        assert [d.name for d in deps] == ['spring-core', 'junit']
        assert deps[0].group == 'org.springframework'
        assert deps[0].version == '4.0.1.RELEASE'
        assert deps[0].identity == 'org.springframework:spring-core:4.0.1.RELEASE'
        assert deps[0].licenses[0].url == 'http://www.apache.org/licenses/LICENSE-2.0.txt'

    def test_group_id_toggle(self) -> None:
        """include_groups switches between foo and org.example:foo."""
        text = "<dependencies><dependency name='org.example:foo:1.0'/></dependencies>"
        assert parse_report_text(text)[0].name == 'foo'
        assert parse_report_text(text, include_groups=True)[0].name == 'org.example:foo'

    def test_unknown_license(self) -> None:
        """No license elements gives exactly one 'unknown' entry."""
        deps = parse_report_text("<dependencies><dependency name='a:b:1'/></dependencies>")
        assert deps[0].licenses == (LicenseEntry('unknown'),)

    def test_missing_identity(self) -> None:
        """A dependency without a name attribute has an empty display name."""
        deps = parse_report_text('<dependencies><dependency><license name="MIT"/></dependency></dependencies>')
        assert deps[0].name == ''
        assert deps[0].identity == ''
        assert deps[0].license_names == ('MIT',)

    def test_empty_identity_with_groups(self) -> None:
        """An empty identity stays empty with include_groups."""
        deps = parse_report_text("<dependencies><dependency name=''/></dependencies>", include_groups=True)
        assert deps[0].name == ''

    def test_nested_grouping(self) -> None:
        """A <dependencies> element below another root is accepted."""
        text = "<report><dependencies><dependency name='a:b:1'/></dependencies></report>"
        assert [d.name for d in parse_report_text(text)] == ['b']

    def test_empty_grouping(self) -> None:
        """An empty report has no dependencies."""
        assert parse_report_text('<dependencies/>') == []

    def test_keeps_duplicates(self) -> None:
        """Parsing alone does not deduplicate."""
        text = "<dependencies><dependency name='a:b:1'/><dependency name='a:b:1'/></dependencies>"
        assert len(parse_report_text(text)) == 2

    def test_numeric_character_references_stripped(self) -> None:
        """Control-character references do not break parsing."""
        text = "<dependencies><dependency name='a:b:1'><license name='Foo&#27; License'/></dependency></dependencies>"
        assert parse_report_text(text)[0].license_names == ('Foo License',)

    def test_bytes_character_references_stripped(self) -> None:
        """References are also dropped from undecoded report contents."""
        data = b"<dependencies><dependency name='a:b:1'><license name='Foo&#27; License'/></dependency></dependencies>"
        assert parse_report_text(data)[0].license_names == ('Foo License',)

    def test_not_xml(self) -> None:
        """Invalid XML raises MalformedReportFailure."""
        with pytest.raises(MalformedReportFailure, match='report.xml'):
            parse_report_text('not xml at all', source='report.xml')

    def test_missing_grouping(self) -> None:
        """A document without <dependencies> raises."""
        with pytest.raises(MalformedReportFailure, match='expected a <dependencies> element'):
            parse_report_text('<licenses><license name="MIT"/></licenses>')


class TestParseReport:
    """Tests for parse_report()."""

    def test_reads_file(self, tmp_path: Path) -> None:
        """A report file on disk is parsed."""
        path = tmp_path / 'dependency-license.xml'
        path.write_text(_PLUGIN_REPORT, encoding='utf-8')
        assert [d.name for d in parse_report(path, include_groups=True)] == [
            'org.springframework:spring-core',
            'junit:junit',
        ]

    def test_error_names_file(self, tmp_path: Path) -> None:
        """Parse errors carry the report path."""
        path = tmp_path / 'dependency-license.xml'
        path.write_text('<dependencies>', encoding='utf-8')
        with pytest.raises(MalformedReportFailure) as exc_info:
            parse_report(path)
        assert exc_info.value.path == path

    def test_declared_latin1_encoding(self, tmp_path: Path) -> None:
        """Reports are decoded in the encoding their XML declaration names."""
        report = (
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<dependencies><dependency name="g:a:1">'
            '<license name="Lizenz für alle"/>'
            '</dependency></dependencies>'
        )
        path = tmp_path / 'dependency-license.xml'
        path.write_bytes(report.encode('latin-1'))
        assert parse_report(path)[0].license_names == ('Lizenz für alle',)

    def test_undeclared_non_utf8_bytes(self, tmp_path: Path) -> None:
        """Bytes that are not UTF-8 without a declaration raise MalformedReportFailure."""
        path = tmp_path / 'dependency-license.xml'
        path.write_bytes(b'<dependencies><dependency name="g:\xff:1"/></dependencies>')
        with pytest.raises(MalformedReportFailure) as exc_info:
            parse_report(path)
        assert exc_info.value.path == path

    def test_unknown_declared_encoding(self, tmp_path: Path) -> None:
        """An encoding name no codec knows raises MalformedReportFailure."""
        path = tmp_path / 'dependency-license.xml'
        path.write_bytes(b'<?xml version="1.0" encoding="x-no-such-codec"?><dependencies/>')
        with pytest.raises(MalformedReportFailure):
            parse_report(path)


class TestFindReportFiles:
    """Tests for find_report_files()."""

    def test_no_reports(self, tmp_path: Path) -> None:
        """A project without reports yields an empty list."""
        assert find_report_files(tmp_path) == []

    def test_finds_reports_recursively_sorted(self, tmp_path: Path) -> None:
        """Reports in every module are found in sorted order."""
        paths = []
        for module in ('web', 'core', '.'):
            path = tmp_path / module / 'build' / 'reports' / 'license' / 'dependency-license.xml'
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text('<dependencies/>')
            paths.append(path)
        (tmp_path / 'core' / 'build' / 'reports' / 'license' / 'license-dependency.xml').write_text('<x/>')
        assert find_report_files(tmp_path) == sorted(paths)


class TestDeduplicate:
    """Tests for deduplicate_dependencies()."""

    def test_keeps_first_occurrence_order(self) -> None:
        """Later duplicates are dropped; order is preserved."""
        deps = [_dep('junit', 'EPL'), _dep('mockito-core', 'MIT'), _dep('junit', 'EPL')]
        assert [d.name for d in deduplicate_dependencies(deps)] == ['junit', 'mockito-core']

    def test_identity_ignored(self) -> None:
        """Records with the same name and licenses but different versions collapse."""
        a = DependencyRecord(identity='g:lib:1', name='lib', licenses=(LicenseEntry('MIT'),), version='1')
        b = DependencyRecord(identity='g:lib:2', name='lib', licenses=(LicenseEntry('MIT'),), version='2')
        assert deduplicate_dependencies([a, b]) == [a]
        assert deduplicate_dependencies([a, b])[0].version == '1'

    def test_license_order_matters(self) -> None:
        """Different license order means different records."""
        deps = [_dep('lib', 'MIT', 'Apache-2.0'), _dep('lib', 'Apache-2.0', 'MIT')]
        assert len(deduplicate_dependencies(deps)) == 2

    def test_idempotent(self) -> None:
        """Deduplicating twice equals deduplicating once."""
        deps = [_dep('a', 'MIT'), _dep('b'), _dep('a', 'MIT'), _dep('b'), _dep('c', 'X', 'Y')]
        once = deduplicate_dependencies(deps)
        assert deduplicate_dependencies(once) == once

    def test_empty(self) -> None:
        """No records in, no records out."""
        assert deduplicate_dependencies([]) == []
