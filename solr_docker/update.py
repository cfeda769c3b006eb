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
Utility for creating the Dockerfiles of new Solr versions.

Usage: solr-docker-update x.y.z [version ...]

  For each version, downloads the release, verifies its checksums and PGP signature,
  and writes <major.minor>/Dockerfile and <major.minor>/alpine/Dockerfile from the
  Dockerfile templates, stamped with the version, SHA256 digest and signing key.

  A partial version, like '5' or '5.3', designates the most recent matching release.
  Any failure aborts the run; Dockerfiles of versions completed before are kept.
"""

import argparse
import logging
import os
import subprocess
import sys

import requests

from solr_docker import artifacts, config, dockerfiles, gpg, templates, versions
from solr_docker.errors import UpdateError
from solr_docker.runtime import append_fail_hook, fail, remove, repo_dir

log = logging.getLogger(__name__)

UPSTREAM_VERSIONS_FILE = "upstream-versions"
KEYS_FILE = "KEYS"


def update_version(requested, upstream, settings, root):
    """
    Resolves, downloads and verifies a single version and writes its Dockerfiles.
    """
    full_version = versions.resolve(requested, upstream, settings.archive_url)
    log.info(f"Updating {requested} to Solr {full_version}")

    release = artifacts.Release(full_version, root)
    sha256 = artifacts.fetch_and_verify(release, settings)

    # Get the code signing keys of this release
    keys_file = os.path.join(root, KEYS_FILE)
    remove(keys_file)
    artifacts.download(settings.keys_url_for(full_version), keys_file)
    key = gpg.signing_key(release.archive, release.companion("asc"), keys_file, settings.keyserver)

    artifacts.cleanup(release, settings)

    written = [dockerfiles.write_files(full_version, sha256, key, variant, root) for variant in dockerfiles.VARIANTS]
    log.info(templates.summary(full_version, sha256, key, written))
    return written


def run(requested_versions, settings, root=None):
    root = root or repo_dir()
    transient = [os.path.join(root, UPSTREAM_VERSIONS_FILE), os.path.join(root, KEYS_FILE)]
    clean_up_transient = lambda: remove(*transient)
    append_fail_hook("Remove transient files", clean_up_transient)

    for variant in dockerfiles.VARIANTS:
        template = dockerfiles.template_path(variant, root)
        if not os.path.exists(template):
            raise UpdateError(f"Missing {template}, run from the directory holding the Dockerfile templates or set SOLR_DOCKER_HOME")

    upstream = versions.fetch_upstream_versions(settings.archive_url, transient[0])
    written = []
    for requested in requested_versions:
        written.extend(update_version(requested, upstream, settings, root))

    clean_up_transient()
    return written


def build_parser():
    parser = argparse.ArgumentParser(
        prog="solr-docker-update",
        description=templates.description(),
        formatter_class=argparse.RawDescriptionHelpFormatter)
    parser.add_argument("versions", nargs="*", help="Full or partial Solr versions, e.g. 8.11.2 or 8.11")
    parser.add_argument("--mirror-url", dest="mirror_url", help="Base URL to download the release archive from")
    parser.add_argument("--archive-url", dest="archive_url", help="Base URL of the release listing, checksums and signatures")
    parser.add_argument("--keys-url", dest="keys_url", help="URL of the KEYS file, {version} is replaced by the release")
    parser.add_argument("--keyserver", dest="keyserver", help="Keyserver used to fetch the signing key")
    parser.add_argument("--keep-all-artifacts", action="store_true", dest="keep_all_artifacts",
                        help="Keep the downloaded archive and verification files")
    parser.add_argument("--keep-solr-artifact", action="store_true", dest="keep_solr_artifact",
                        help="Keep the downloaded archive")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log debug output")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    if not args.versions:
        print(templates.usage(), file=sys.stderr)
        sys.exit(1)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format='%(message)s')
    settings = config.load(args)

    try:
        run(args.versions, settings)
    except UpdateError as e:
        if getattr(e, "output", ""):
            log.error(e.output)
        fail(str(e))
    except subprocess.CalledProcessError as e:
        command = e.cmd if isinstance(e.cmd, str) else " ".join(e.cmd)
        fail(f"Command failed with exit code {e.returncode}: {command}")
    except requests.RequestException as e:
        fail(f"Network error: {e}")
    except OSError as e:
        fail(str(e))


if __name__ == "__main__":
    main()
