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

"""Writes the disjoint sets of one or more edge lists, one set per line.

Each line of an edge list names elements separated by --delimiter (default
whitespace). Two elements on a line are linked; a lone element is still
reported, as its own set. For example:

    disjoint-sets --min_set_size=2 edges.txt @more_edge_files.rsp
"""

from absl import app
from absl import flags
from absl import logging
from disjoint_hash_set import config
from disjoint_hash_set.config import SetsConfig
from disjoint_hash_set.disjoint_set import DisjointHashSet
from disjoint_hash_set import util
from pathlib import Path
from typing import FrozenSet, Iterable, List, Sequence, Tuple


FLAGS = flags.FLAGS

flags.DEFINE_string("config", None, "Config file (toml); defaults apply if unset.")


def build(
    edge_files: Iterable[Path], sets_config: SetsConfig
) -> DisjointHashSet[str]:
    registry = DisjointHashSet()
    for edge_file in edge_files:
        with open(edge_file, encoding="utf-8") as f:
            util.read_links(
                f,
                delimiter=sets_config.delimiter,
                comment_prefix=sets_config.comment_prefix,
                registry=registry,
            )
        logging.debug("Read %s, %d elements so far", edge_file, len(registry))
    return registry


def format_sets(sets: Sequence[FrozenSet[str]], sets_config: SetsConfig) -> List[str]:
    groups: List[Tuple[str, ...]] = [
        tuple(s) for s in sets if len(s) >= sets_config.min_set_size
    ]
    if sets_config.sort_output:
        groups = sorted(tuple(sorted(g)) for g in groups)
    return [sets_config.member_separator.join(g) for g in groups]


def _run(argv):
    edge_files = [Path(f) for f in util.expand_response_files(argv[1:])]
    if not edge_files:
        raise app.UsageError("Must specify at least one edge list file")

    config_file = Path(FLAGS.config) if FLAGS.config else None
    sets_config = config.load(config_file)

    registry = build(edge_files, sets_config)
    num_elements = len(registry)
    sets = registry.sets()
    logging.info(
        "%d elements in %d sets from %d file(s)",
        num_elements,
        len(sets),
        len(edge_files),
    )

    lines = format_sets(sets, sets_config)
    with util.file_printer(sets_config.output_file) as print:
        for line in lines:
            print(line)
    if not sets_config.writes_to_stdout:
        logging.info("Wrote %d sets to %s", len(lines), sets_config.output_file)


def main():
    # We don't seem to be __main__ when run as cli tool installed by setuptools
    app.run(_run)


if __name__ == "__main__":
    app.run(_run)
