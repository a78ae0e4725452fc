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

"""licensekit: dependency and license discovery for Gradle builds.

Usage::

    from pathlib import Path

    from licensekit.backends.package_manager.gradle import GradlePackageManager
    from licensekit.config import load_config

    manager = GradlePackageManager(load_config(Path('path/to/project')))
    if manager.active():
        for dep in manager.current_packages():
            print(dep.name, dep.license_names)
"""

__version__ = '0.1.0'
