# Copyright 2020 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#      http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

from setuptools import setup, find_packages

extras_require={
    "test": [
        "pytest",
    ],
    "lint": [
        "black",
        "pytype",
    ],
}
extras_require["dev"] = extras_require["test"] + extras_require["lint"]

setup(
    name="disjoint_hash_set",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    entry_points={"console_scripts": ["disjoint-sets=disjoint_hash_set.write_sets:main"]},
    install_requires=[
        "absl-py>=0.9.0",
        "toml>=0.10.1",
    ],
    extras_require=extras_require,
    # importlib.resources.files
    python_requires=">=3.9",

    package_data={"disjoint_hash_set.data": ["*.toml"]},

    # metadata to display on PyPI
    description=("Incremental disjoint set (union-find) over hashable elements"),
)
