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

"""Small helpers for reading edge lists and writing results."""

import contextlib
from disjoint_hash_set.disjoint_set import DisjointHashSet
from functools import partial
import os
import shlex
from typing import Iterable, List, Optional, Tuple


def shell_split(s: str) -> List[str]:
    """Split a shell command line into a list of arguments."""
    return shlex.split(s, posix=os.name == "posix")


def expand_response_files(argv: List[str]) -> List[str]:
    """
    Extend argument list with '@'-prefixed response files.

    Lets callers pass a list of inputs that would exceed the shell's maximum
    command-line length.
    """
    result = []
    for arg in argv:
        if arg.startswith("@"):
            with open(arg[1:], "r") as rspfile:
                rspfile_content = rspfile.read()
            result.extend(shell_split(rspfile_content))
        else:
            result.append(arg)
    return result


@contextlib.contextmanager
def file_printer(filename):
    if filename == "-":  # conventionally means print to stdout
        yield print
    else:
        with open(filename, "w", encoding="utf-8") as f:
            yield partial(print, file=f)


def parse_line(
    line: str, delimiter: str = "", comment_prefix: str = "#"
) -> Tuple[str, ...]:
    if comment_prefix and comment_prefix in line:
        line = line[: line.index(comment_prefix)]
    line = line.strip()
    if not line:
        return ()
    if not delimiter:
        return tuple(line.split())
    # empty fields, e.g. from a trailing delimiter, are dropped
    return tuple(f for f in (f.strip() for f in line.split(delimiter)) if f)


def read_links(
    lines: Iterable[str],
    delimiter: str = "",
    comment_prefix: str = "#",
    registry: Optional[DisjointHashSet[str]] = None,
) -> DisjointHashSet[str]:
    """Feeds an edge list into a DisjointHashSet.

    One field per line adds a lone element, two fields link them, more than
    two put every field on the line into the same set.
    """
    if registry is None:
        registry = DisjointHashSet()
    for line in lines:
        fields = parse_line(line, delimiter, comment_prefix)
        if not fields:
            continue
        first, *rest = fields
        if not rest:
            registry.insert(first)
        for other in rest:
            registry.link(first, other)
    return registry
