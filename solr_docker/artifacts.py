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
Download of a Solr release archive and its verification files,
and checks of the published digests.
"""

import dataclasses
import hashlib
import logging
import os

import requests

from solr_docker.errors import ChecksumError, DownloadError
from solr_docker.runtime import remove

log = logging.getLogger(__name__)

CHUNK_SIZE = 65536


@dataclasses.dataclass
class Release:
    version: str
    work_dir: str = "."

    @property
    def name(self):
        return f"solr-{self.version}.tgz"

    @property
    def archive(self):
        return os.path.join(self.work_dir, self.name)

    def companion(self, ext):
        """
        Local path of the .sha1, .md5 or .asc file published next to the archive.
        """
        return f"{self.archive}.{ext}"

    def archive_url(self, mirror_url):
        return f"{mirror_url}/{self.version}/{self.name}"

    def companion_url(self, archive_url, ext):
        return f"{archive_url}/{self.version}/{self.name}.{ext}"


def download(url, path):
    """
    Download url into path, unless path already exists.
    The content is written to a .part file first so an interrupted transfer is never cached.
    """
    if os.path.exists(path):
        log.info(f"Using cached {path}")
        return False
    log.info(f"Downloading {url} to {path}")
    partial = path + ".part"
    try:
        with requests.get(url, stream=True, timeout=60) as response:
            if response.status_code != 200:
                raise DownloadError(f"Failed to download {url}: HTTP {response.status_code}")
            with open(partial, "wb") as f:
                for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                    f.write(chunk)
        os.replace(partial, path)
    finally:
        remove(partial)
    return True


def file_digest(path, algorithm):
    h = hashlib.new(algorithm)
    with open(path, "rb") as f:
        while True:
            chunk = f.read(CHUNK_SIZE)
            if not chunk:
                break
            h.update(chunk)
    return h.hexdigest()


def read_digest(path):
    """
    Reads the expected digest from a checksum file, either in `sha1sum` format
    ("<digest>  <file>") or holding the bare digest.
    """
    with open(path) as f:
        content = f.read().split()
    if not content:
        raise ChecksumError(path, os.path.splitext(path)[1].lstrip("."), "a digest", "an empty file")
    return content[0].lower()


def verify_digest(path, digest_file, algorithm):
    expected = read_digest(digest_file)
    actual = file_digest(path, algorithm)
    if actual != expected:
        raise ChecksumError(path, algorithm, expected, actual)
    log.info(f"{os.path.basename(path)}: {algorithm.upper()} OK")


def fetch_and_verify(release, settings):
    """
    Downloads the archive and its verification files, checks the published SHA1
    and MD5 digests, and returns the SHA256 digest of the archive.
    """
    download(release.archive_url(settings.mirror_url), release.archive)

    # SHA1 and MD5 first so an incomplete download fails clearly before the PGP check
    for algorithm in ("sha1", "md5"):
        digest_file = release.companion(algorithm)
        download(release.companion_url(settings.archive_url, algorithm), digest_file)
        verify_digest(release.archive, digest_file, algorithm)

    sha256 = file_digest(release.archive, "sha256")
    log.info(f"SHA256 of {release.name}: {sha256}")

    download(release.companion_url(settings.archive_url, "asc"), release.companion("asc"))
    return sha256


def cleanup(release, settings):
    """
    Removes the downloaded files according to the retention settings.
    """
    if settings.keep_all_artifacts:
        return
    remove(release.companion("asc"), release.companion("sha1"), release.companion("md5"))
    if not settings.keep_solr_artifact:
        remove(release.archive)
