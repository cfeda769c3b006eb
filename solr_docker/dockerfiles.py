#
# Licensed to the Apache Software Foundation (ASF) under one or more
# contributor license agreements.  See the NOTICE file distributed with
# this work for additional information regarding copyright ownership.
# The ASF licenses this file to You under the Apache License, Version 2.0
# (the "License"); you may not use this file except in compliance with
# the License.  You may obtain a copy of the License at
#
#    http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#

"""
Writes the Dockerfile of each image variant from its template,
stamped with the release version, digest and signing key.
"""

import logging
import os
import re

from solr_docker import textfiles
from solr_docker.runtime import repo_dir

log = logging.getLogger(__name__)

VARIANTS = (None, "alpine")

SHORT_VERSION_PATTERN = re.compile(r"^([0-9]+\.[0-9]+)")


def short_version(full_version):
    """
    Detects the major.minor version used to name the output directory, e.g. 8.1 for 8.1.1
    """
    match = SHORT_VERSION_PATTERN.match(full_version)
    if not match:
        raise ValueError(f"Invalid release version {full_version}")
    return match.group(1)


def target_dir(full_version, variant=None, root=None):
    root = root or repo_dir()
    if variant:
        return os.path.join(root, short_version(full_version), variant)
    return os.path.join(root, short_version(full_version))


def template_path(variant=None, root=None):
    root = root or repo_dir()
    if variant:
        return os.path.join(root, f"Dockerfile-{variant}.template")
    return os.path.join(root, "Dockerfile.template")


def write_files(full_version, sha256, key, variant=None, root=None):
    """
    Copies the variant's template to <major.minor>[/<variant>]/Dockerfile
    and fills in the SOLR_VERSION, SOLR_SHA256 and SOLR_KEY environment lines.
    """
    directory = target_dir(full_version, variant, root)
    dockerfile = os.path.join(directory, "Dockerfile")
    os.makedirs(directory, exist_ok=True)
    textfiles.copy(template_path(variant, root), dockerfile)
    for name, value in (("SOLR_VERSION", full_version), ("SOLR_SHA256", sha256), ("SOLR_KEY", key)):
        if textfiles.replace(dockerfile, rf"^(ENV {name}) .*", rf"\1 {value}") == 0:
            log.warning(f"No ENV {name} line in {dockerfile}")
    log.info(f"Wrote {dockerfile}")
    return dockerfile
