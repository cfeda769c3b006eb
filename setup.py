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

import re
from setuptools import find_packages, setup

version = ''
with open('solr_docker/__init__.py', 'r') as fd:
    version = re.search(r'^__version__\s*=\s*[\'"]([^\'"]*)[\'"]', fd.read(), re.MULTILINE).group(1)

setup(name="solr-docker-update",
      version=version,
      description="Generates the versioned Dockerfiles of the Apache Solr docker image",
      author="Apache Lucene/Solr",
      platforms=["any"],
      license="apache2.0",
      packages=find_packages(exclude=["tests", "tests.*"]),
      python_requires=">=3.8",
      install_requires=["requests>=2.5.0", "beautifulsoup4"],
      extras_require={"test": ["pytest", "mock"]},
      entry_points={
          "console_scripts": ["solr-docker-update=solr_docker.update:main"],
      },
      )
