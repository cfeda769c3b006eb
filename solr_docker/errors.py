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
Errors raised while resolving, fetching and verifying a Solr release.
"""


class UpdateError(Exception):
    """
    Base class for failures that abort the update run.
    """


class VersionNotFoundError(UpdateError):
    def __init__(self, version, url):
        super().__init__(f"Cannot find {version} in {url}")
        self.version = version
        self.url = url


class DownloadError(UpdateError):
    pass


class ChecksumError(UpdateError):
    def __init__(self, path, algorithm, expected, actual):
        super().__init__(f"{algorithm.upper()} mismatch for {path}: expected {expected} but got {actual}")
        self.path = path
        self.algorithm = algorithm
        self.expected = expected
        self.actual = actual


class SignatureError(UpdateError):
    def __init__(self, msg, output=""):
        super().__init__(msg)
        self.output = output
