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

"""Structured logging for licensekit.

Configures `structlog <https://www.structlog.org/>`_ with two output modes:

- **Console** (default when TTY): colored, human-readable output.
- **JSON** (``--json-log``): Machine-readable, one JSON object per line.

Both modes write to stderr so stdout stays clean for the dependency
report (e.g., ``licensekit --format json | jq``).

Gradle builds receive repository and signing credentials through the
environment (``ORG_GRADLE_PROJECT_<name>`` becomes project property
``<name>``) or as ``-P<name>=<value>`` arguments, and failing command
lines end up in the log. The redaction processor masks both.

Usage::

    from licensekit.logging import configure_logging, get_logger

    configure_logging(verbose=True, json_log=False)
    log = get_logger()
    log.info('gradle_subprojects_discovered', count=3)
"""

from __future__ import annotations

import logging
import os
import re
import sys
from typing import Any

import structlog


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    json_log: bool = False,
    redact_secrets: bool = True,
) -> None:
    """Configure structlog for licensekit.

    Should be called once at startup, before any logging calls.

    Args:
        verbose: Enable debug-level output (includes every command run).
        quiet: Suppress info-level output (only warnings and errors).
        json_log: Use JSON output instead of colored console output.
        redact_secrets: Scrub credential env var values and credential
            ``-P``/``-D`` property arguments from log output.
            Can also be disabled via ``LICENSEKIT_REDACT_SECRETS=0``.
    """
    if quiet:
        level = logging.WARNING
    elif verbose:
        level = logging.DEBUG
    else:
        level = logging.INFO

    logging.basicConfig(
        format='%(message)s',
        stream=sys.stderr,
        level=level,
        force=True,
    )

    global _secret_values, _redaction_enabled  # noqa: PLW0603
    _redaction_enabled = redact_secrets and os.environ.get('LICENSEKIT_REDACT_SECRETS', '1') != '0'
    _secret_values = _build_secret_values() if _redaction_enabled else frozenset()

    shared_processors: list[structlog.types.Processor] = [  # type: ignore[assignment]
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt='iso'),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
        redact_sensitive_values,
    ]

    if json_log:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=sys.stderr.isatty(),
        )

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    for handler in logging.root.handlers:
        handler.setFormatter(formatter)


def get_logger(name: str = 'licensekit') -> structlog.stdlib.BoundLogger:
    """Return a bound structlog logger.

    Args:
        name: Logger name, used for filtering and identification.

    Returns:
        A :class:`structlog.stdlib.BoundLogger` instance.
    """
    return structlog.get_logger(name)


# Credentials a Gradle build reads from the environment under fixed names.
_SENSITIVE_ENV_VARS: frozenset[str] = frozenset({
    'GRADLE_ENTERPRISE_ACCESS_KEY',
    'DEVELOCITY_ACCESS_KEY',
    'GRADLE_PUBLISH_KEY',
    'GRADLE_PUBLISH_SECRET',
    'MAVEN_PASSWORD',
    'ARTIFACTORY_API_KEY',
    'GITHUB_TOKEN',
    'GH_TOKEN',
})

# Gradle turns ORG_GRADLE_PROJECT_<name> into project property <name>
# and ORG_GRADLE_SYSTEMPROP_<name> into system property <name>.
_GRADLE_PROPERTY_ENV_PREFIXES: tuple[str, ...] = ('ORG_GRADLE_PROJECT_', 'ORG_GRADLE_SYSTEMPROP_')

_CREDENTIAL_WORDS: tuple[str, ...] = ('password', 'passphrase', 'secret', 'token', 'key', 'credential')

# -P<name>=<value> and -D<name>=<value> on a Gradle command line.
_PROPERTY_ARG_RE = re.compile(r'(?<!\S)(?P<flag>-[PD](?P<name>[\w.\-]+)=)(?P<value>\S+)')

_MIN_SECRET_LENGTH = 8
_REDACTED = '[REDACTED]'


def is_sensitive_property(name: str) -> bool:
    """Return ``True`` if a Gradle property name looks like a credential.

    >>> is_sensitive_property('signingPassword')
    True
    >>> is_sensitive_property('org.gradle.jvmargs')
    False
    """
    lowered = name.lower()
    return any(word in lowered for word in _CREDENTIAL_WORDS)


def _is_sensitive_env_var(name: str) -> bool:
    if name in _SENSITIVE_ENV_VARS:
        return True
    for prefix in _GRADLE_PROPERTY_ENV_PREFIXES:
        if name.startswith(prefix):
            return is_sensitive_property(name[len(prefix) :])
    return False


def _build_secret_values() -> frozenset[str]:
    """Collect the current values of credential env vars.

    Covers the fixed names above plus any ``ORG_GRADLE_PROJECT_*`` or
    ``ORG_GRADLE_SYSTEMPROP_*`` variable whose property name looks like
    a credential. Empty values are skipped.
    """
    return frozenset(value for name, value in os.environ.items() if value and _is_sensitive_env_var(name))


# Populated by configure_logging(); used by the processor.
_secret_values: frozenset[str] = frozenset()
_redaction_enabled: bool = True


def _mask_property_arg(match: re.Match[str]) -> str:
    if not is_sensitive_property(match.group('name')):
        return match.group(0)
    return f'{match.group("flag")}{_REDACTED}'


def _scrub(value: object) -> object:
    """Redact secret values and credential property arguments in a string."""
    if not isinstance(value, str):
        return value
    result = value
    for secret in _secret_values:
        if len(secret) >= _MIN_SECRET_LENGTH and secret in result:
            result = result.replace(secret, _REDACTED)
    return _PROPERTY_ARG_RE.sub(_mask_property_arg, result)


def redact_sensitive_values(
    logger: Any,  # noqa: ANN401
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor: scrub credentials from all event fields.

    Two things are replaced with ``[REDACTED]`` in every string field,
    including the command and captured stderr of a failed Gradle run:

    - the runtime value of any credential env var, and
    - the value of ``-P``/``-D`` arguments naming a credential
      property, as in ``./gradlew -PsigningPassword=... downloadLicenses``.
    """
    if not _redaction_enabled:
        return event_dict
    return {k: _scrub(v) for k, v in event_dict.items()}


__all__ = [
    'configure_logging',
    'get_logger',
    'is_sensitive_property',
    'redact_sensitive_values',
]
