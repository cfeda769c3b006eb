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
Text templates for long messages with instructions for the user.
We keep these in this separate file to avoid cluttering the script.
"""


def usage():
    return """Usage: solr-docker-update [version ...]

Creates the Dockerfiles for the given Solr versions.
If you specify a partial version, like '5' or '5.3', the most recent matching release, like 5.3.2, is used.
"""


def description():
    return """
Creates the Dockerfile of each image variant for new Solr versions.

The release archive is downloaded, its SHA1 and MD5 checksums are checked and its PGP
signature verified against the Lucene KEYS file and the keyserver. The resulting SHA256
and signing key fingerprint are recorded in the Dockerfile, for verification at docker
build time. Note that verifying the signature imports keys into your keyring.

Environment overrides:
  mirrorUrl            base URL to download the release archive from
  archiveUrl           base URL of the release listing, checksums and signatures
  keysUrl              URL of the KEYS file, {version} is replaced by the release
  SOLR_DOCKER_HOME     directory holding the templates, defaults to the current directory
  keyserver            keyserver used to fetch the signing key
  KEEP_ALL_ARTIFACTS   keep the downloaded archive and verification files
  KEEP_SOLR_ARTIFACT   keep the downloaded archive only
"""


def summary(full_version, sha256, key, dockerfiles):
    written = "\n".join(f"  {path}" for path in dockerfiles)
    return f"""
Solr {full_version}
  SHA256: {sha256}
  Key:    {key}
{written}"""
