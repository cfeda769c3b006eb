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
Auxiliary functions to access and rewrite text files.
"""

import re
import shutil


def read(file_path):
    with open(file_path) as f:
        return f.read()


def write(file_path, content):
    with open(file_path, "w") as f:
        f.write(content)


def copy(src, dst):
    shutil.copyfile(src, dst)


def replace(path, pattern, replacement):
    """
    Rewrite the lines of a text file matching a regex pattern, returning how many matched.
    """
    matcher = re.compile(pattern)
    updated = []
    matched = 0
    for line in read(path).splitlines(keepends=True):
        if matcher.search(line):
            line = matcher.sub(replacement, line)
            matched += 1
        updated.append(line)

    write(path, "".join(updated))
    return matched
