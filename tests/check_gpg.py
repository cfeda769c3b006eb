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

import subprocess

import pytest
from mock import call, patch

from solr_docker import gpg
from solr_docker.errors import SignatureError

FINGERPRINT = "2085660D9C1FCCACC4A479A3BF160FF14992A24C"

ERRSIG = """gpg: Signature made Tue 28 May 2019 08:15:00 UTC
gpg:                using RSA key BF160FF14992A24C
[GNUPG:] NEWSIG
[GNUPG:] ERRSIG BF160FF14992A24C 1 8 00 1559031300 9 -
[GNUPG:] NO_PUBKEY BF160FF14992A24C
gpg: Can't check signature: No public key
"""

VALIDSIG = f"""[GNUPG:] NEWSIG
gpg: Signature made Tue 28 May 2019 08:15:00 UTC
[GNUPG:] GOODSIG BF160FF14992A24C Ishan Chattopadhyaya <ishan@apache.org>
gpg: Good signature from "Ishan Chattopadhyaya <ishan@apache.org>" [unknown]
[GNUPG:] VALIDSIG {FINGERPRINT} 2019-05-28 1559031300 0 4 0 1 8 00 {FINGERPRINT}
[GNUPG:] TRUST_UNDEFINED 0 pgp
"""


class CheckParseStatus(object):
    def check_first_pass_statuses(self):
        assert gpg.parse_status(ERRSIG, gpg.FIRST_PASS_STATUSES) == "BF160FF14992A24C"
        assert gpg.parse_status("[GNUPG:] BADSIG BF160FF14992A24C someone\n", gpg.FIRST_PASS_STATUSES) == "BF160FF14992A24C"
        assert gpg.parse_status(VALIDSIG, gpg.FIRST_PASS_STATUSES) == FINGERPRINT

    def check_validsig_only(self):
        assert gpg.parse_status(ERRSIG, ("VALIDSIG",)) is None
        assert gpg.parse_status(VALIDSIG, ("VALIDSIG",)) == FINGERPRINT

    def check_ignores_human_readable_lines(self):
        assert gpg.parse_status("gpg: VALIDSIG not a status line\n", ("VALIDSIG",)) is None


class CheckSigningKey(object):
    def check_short_id_then_fingerprint(self):
        with patch("solr_docker.gpg.execute", side_effect=[ERRSIG, VALIDSIG]) as execute, \
                patch("solr_docker.gpg.cmd") as cmd:
            key = gpg.signing_key("solr-8.1.1.tgz", "solr-8.1.1.tgz.asc", "KEYS", "keys.example")
        assert key == FINGERPRINT
        assert cmd.call_args_list == [
            call("Importing the code signing keys", ["gpg", "--batch", "--import", "KEYS"]),
            call("Fetching key BF160FF14992A24C from keys.example",
                 ["gpg", "--batch", "--keyserver", "keys.example", "--recv-keys", "BF160FF14992A24C"]),
            call("Verifying the signature of solr-8.1.1.tgz",
                 ["gpg", "--batch", "--verify", "solr-8.1.1.tgz.asc", "solr-8.1.1.tgz"]),
        ]
        execute.assert_called_with(
            ["gpg", "--batch", "--status-fd", "1", "--verify", "solr-8.1.1.tgz.asc", "solr-8.1.1.tgz"],
            allow_failure=True)

    def check_no_signature_found(self):
        with patch("solr_docker.gpg.execute", return_value="gpg: no valid OpenPGP data found.\n"), \
                patch("solr_docker.gpg.cmd"):
            with pytest.raises(SignatureError):
                gpg.signing_key("solr-8.1.1.tgz", "solr-8.1.1.tgz.asc", "KEYS", "keys.example")

    def check_bad_signature(self):
        failure = subprocess.CalledProcessError(1, ["gpg"], output=b"gpg: BAD signature\n")

        def run(action, cmd_arg):
            if "--verify" in cmd_arg:
                raise failure

        with patch("solr_docker.gpg.execute", return_value="[GNUPG:] BADSIG BF160FF14992A24C someone\n"), \
                patch("solr_docker.gpg.cmd", side_effect=run):
            with pytest.raises(SignatureError) as e:
                gpg.signing_key("solr-8.1.1.tgz", "solr-8.1.1.tgz.asc", "KEYS", "keys.example")
        assert "BAD signature" in e.value.output
