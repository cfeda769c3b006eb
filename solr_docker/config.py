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
Settings of an update run, read from the environment and overridden from the command line.
"""

import dataclasses
import logging
import os
from typing import Optional

log = logging.getLogger(__name__)

DEFAULT_MIRROR_URL = "https://archive.apache.org/dist/lucene/solr"
DEFAULT_ARCHIVE_URL = "https://archive.apache.org/dist/lucene/solr"
DEFAULT_KEYS_URL = "https://archive.apache.org/dist/lucene/java/{version}/KEYS"
DEFAULT_KEYSERVER = "pgpkeys.mit.edu"


def get_env(key: str, fn = str, default = None) -> Optional:
    value = os.getenv(key)
    if value is None:
        log.debug(f"Could not find env {key}")
        return default
    else:
        log.debug(f"Read env {key}: {value}")
        return fn(value)


def flag(value: str) -> bool:
    # Any non-empty value switches the flag on, matching `[ -z "$VAR" ]` checks.
    return value != ""


@dataclasses.dataclass(frozen=True)
class Settings:
    mirror_url: str = DEFAULT_MIRROR_URL
    archive_url: str = DEFAULT_ARCHIVE_URL
    keys_url: str = DEFAULT_KEYS_URL
    keyserver: str = DEFAULT_KEYSERVER
    keep_all_artifacts: bool = False
    keep_solr_artifact: bool = False

    def keys_url_for(self, version: str) -> str:
        return self.keys_url.format(version=version)


def from_env() -> Settings:
    """
    Build the settings from the environment overrides.
    """
    return Settings(
        mirror_url=get_env("mirrorUrl", default=DEFAULT_MIRROR_URL).rstrip("/"),
        archive_url=get_env("archiveUrl", default=DEFAULT_ARCHIVE_URL).rstrip("/"),
        keys_url=get_env("keysUrl", default=DEFAULT_KEYS_URL),
        keyserver=get_env("keyserver", default=DEFAULT_KEYSERVER),
        keep_all_artifacts=get_env("KEEP_ALL_ARTIFACTS", flag, default=False),
        keep_solr_artifact=get_env("KEEP_SOLR_ARTIFACT", flag, default=False),
    )


def load(args=None) -> Settings:
    """
    Environment settings with any command line values applied on top.
    """
    settings = from_env()
    if args is None:
        return settings
    overrides = {}
    if args.mirror_url:
        overrides["mirror_url"] = args.mirror_url.rstrip("/")
    if args.archive_url:
        overrides["archive_url"] = args.archive_url.rstrip("/")
    if args.keys_url:
        overrides["keys_url"] = args.keys_url
    if args.keyserver:
        overrides["keyserver"] = args.keyserver
    if args.keep_all_artifacts:
        overrides["keep_all_artifacts"] = True
    if args.keep_solr_artifact:
        overrides["keep_solr_artifact"] = True
    return dataclasses.replace(settings, **overrides)
