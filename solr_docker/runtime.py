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
Auxiliary functions to manage the update script runtime
and launch external utilities.
"""

import logging
import os
import subprocess
import sys

log = logging.getLogger(__name__)


def repo_dir():
    """
    The checkout holding the Dockerfile templates, where the version directories are written.
    """
    return os.path.abspath(os.environ.get("SOLR_DOCKER_HOME", os.getcwd()))


fail_hooks = []
failing = False


def append_fail_hook(name, hook_fn):
    """
    Register a fail hook function, to run in case fail() is called.
    """
    fail_hooks.append((name, hook_fn))


def fail(msg = ""):
    """
    Terminate execution with the given message,
    after running any registered hooks.
    """
    global failing
    if failing:
        raise Exception("Recursive fail invocation")
    failing = True

    for name, func in fail_hooks:
        try:
            func()
        except Exception as e:
            log.warning(f"Exception caught in fail hook {name}: {e}")

    log.error(f"FAILURE: {msg}")
    sys.exit(1)


def execute(cmd, *args, **kwargs):
    """
    Execute an external command and return its output.
    With allow_failure=True the output is returned even if the command exits non-zero.
    """
    if "shell" not in kwargs and isinstance(cmd, str):
        cmd = cmd.split()
    if "input" in kwargs and isinstance(kwargs["input"], str):
        kwargs["input"] = kwargs["input"].encode()
    allow_failure = kwargs.pop("allow_failure", False)
    kwargs["stderr"] = subprocess.STDOUT
    try:
        output = subprocess.check_output(cmd, *args, **kwargs)
    except subprocess.CalledProcessError as e:
        if not allow_failure:
            raise
        output = e.output or b""
    return output.decode("utf-8")


def _prefix(prefix_str, value_str):
    return prefix_str + value_str.replace("\n", "\n" + prefix_str)


def cmd(action, cmd_arg, *args, **kwargs):
    """
    Execute an external command, logging the command line and its output.
    Failures are logged and re-raised.
    """
    log.info(f"{action}\n$ {cmd_arg if isinstance(cmd_arg, str) else ' '.join(cmd_arg)}")
    try:
        output = execute(cmd_arg, *args, **kwargs)
    except subprocess.CalledProcessError as e:
        log.error(_prefix("> ", e.output.decode("utf-8").strip()))
        raise
    if output.strip():
        log.info(_prefix("> ", output.strip()))
    return output


def remove(*paths):
    """
    Delete the given files, ignoring the ones that do not exist.
    """
    for path in paths:
        if os.path.exists(path):
            log.debug(f"Removing {path}")
            os.remove(path)
