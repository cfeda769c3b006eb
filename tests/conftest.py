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

import hashlib
import os

import pytest

from solr_docker import runtime


TEMPLATES_DIR = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")


@pytest.fixture(autouse=True)
def fresh_runtime(monkeypatch):
    monkeypatch.setattr(runtime, "fail_hooks", [])
    monkeypatch.setattr(runtime, "failing", False)
    for key in ("mirrorUrl", "archiveUrl", "keysUrl", "keyserver", "KEEP_ALL_ARTIFACTS", "KEEP_SOLR_ARTIFACT",
                "SOLR_DOCKER_HOME"):
        monkeypatch.delenv(key, raising=False)


@pytest.fixture
def work_dir(tmp_path):
    """
    A working directory holding copies of the Dockerfile templates.
    """
    for name in ("Dockerfile.template", "Dockerfile-alpine.template"):
        with open(os.path.join(TEMPLATES_DIR, name)) as src:
            (tmp_path / name).write_text(src.read())
    return tmp_path


def write_release(directory, version, content=b"solr release archive"):
    """
    Lays out a downloaded archive with matching .sha1 and .md5 files and a signature.
    """
    name = f"solr-{version}.tgz"
    (directory / name).write_bytes(content)
    (directory / f"{name}.sha1").write_text(f"{hashlib.sha1(content).hexdigest()}  {name}\n")
    (directory / f"{name}.md5").write_text(f"{hashlib.md5(content).hexdigest()}\n")
    (directory / f"{name}.asc").write_text("-----BEGIN PGP SIGNATURE-----\n")
    return hashlib.sha256(content).hexdigest()


@pytest.fixture
def release_files():
    return write_release
