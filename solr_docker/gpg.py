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
Auxiliary functions to interact with GNU Privacy Guard (GPG).
Note that importing the KEYS file and fetching the signing key modify the local keyring.
"""

import logging
import subprocess

from solr_docker.errors import SignatureError
from solr_docker.runtime import cmd, execute

log = logging.getLogger(__name__)

STATUS_PREFIX = "[GNUPG:]"
FIRST_PASS_STATUSES = ("BADSIG", "ERRSIG", "VALIDSIG")


def import_keys(keys_file):
    cmd("Importing the code signing keys", ["gpg", "--batch", "--import", keys_file])


def recv_key(key_id, keyserver):
    cmd(f"Fetching key {key_id} from {keyserver}", ["gpg", "--batch", "--keyserver", keyserver, "--recv-keys", key_id])


def parse_status(output, statuses):
    """
    Returns the key field of the first machine-readable status line
    with one of the given statuses, or None.
    """
    for line in output.splitlines():
        fields = line.split()
        if len(fields) >= 3 and fields[0] == STATUS_PREFIX and fields[1] in statuses:
            return fields[2]
    return None


def status_key(content, signature, statuses):
    output = execute(["gpg", "--batch", "--status-fd", "1", "--verify", signature, content], allow_failure=True)
    return parse_status(output, statuses)


def verify(content, signature):
    """
    Verify the given GPG signature for the specified content.
    """
    try:
        cmd(f"Verifying the signature of {content}", ["gpg", "--batch", "--verify", signature, content])
    except subprocess.CalledProcessError as e:
        raise SignatureError(f"Bad signature {signature} for {content}", e.output.decode("utf-8"))


def signing_key(content, signature, keys_file, keyserver):
    """
    Verifies the signature against the imported KEYS and the key published on the
    keyserver, and returns the full fingerprint of the signing key.
    """
    import_keys(keys_file)

    # Only the long key id is reported unless the signature is valid
    key_id = status_key(content, signature, FIRST_PASS_STATUSES)
    if key_id is None:
        raise SignatureError(f"No signing key reported by gpg for {signature}")
    recv_key(key_id, keyserver)

    verify(content, signature)
    fingerprint = status_key(content, signature, ("VALIDSIG",))
    if fingerprint is None:
        raise SignatureError(f"No valid signature found in {signature}")
    log.info(f"{signature} signed with key {fingerprint}")
    return fingerprint
