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
Resolves requested, possibly partial, Solr versions against the releases
published in the upstream directory listing.
"""

import logging
import re
from typing import Iterable, List, Tuple

import requests
from bs4 import BeautifulSoup

from solr_docker import textfiles
from solr_docker.errors import DownloadError, VersionNotFoundError

log = logging.getLogger(__name__)

RELEASE_VERSION_PATTERN = re.compile(r"^[0-9]+\.[0-9]+\.[0-9]+$")


def version_key(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


def parse_listing(html: str) -> List[str]:
    """
    Extract the release versions linked as `x.y.z/` from an HTML directory listing.
    """
    soup: BeautifulSoup = BeautifulSoup(html, "html.parser")
    versions = []
    for link in soup.find_all("a", href=True):
        name = link["href"].rstrip("/")
        if RELEASE_VERSION_PATTERN.match(name):
            versions.append(name)
    return versions


def sort_versions(versions: Iterable[str]) -> List[str]:
    return sorted(set(versions), key=version_key)


def fetch_upstream_versions(url: str, path: str = None) -> List[str]:
    """
    Fetch the sorted list of released versions from the upstream listing,
    optionally recording it one version per line in the given file.
    """
    log.info(f"Fetching the list of releases from {url}")
    response = requests.get(url, timeout=60)
    if response.status_code != 200:
        raise DownloadError(f"Failed to fetch {url}: HTTP {response.status_code}")
    versions = sort_versions(parse_listing(response.text))
    log.info(f"Found {len(versions)} releases")
    if path is not None:
        textfiles.write(path, "".join(f"{v}\n" for v in versions))
    return versions


def matches(version: str, prefix: str) -> bool:
    return version == prefix or version.startswith(prefix + ".")


def resolve(prefix: str, versions: List[str], url: str = "the upstream listing") -> str:
    """
    Returns the most recent version in the list that the prefix designates,
    e.g. '5.3' resolves to the highest 5.3.x release.
    """
    prefix = prefix.rstrip("/").rstrip(".")
    candidates = [v for v in versions if matches(v, prefix)]
    if not candidates:
        raise VersionNotFoundError(prefix, url)
    full_version = max(candidates, key=version_key)
    log.debug(f"Resolved {prefix} to {full_version}")
    return full_version
