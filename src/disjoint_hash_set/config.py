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

from absl import flags
import importlib.resources as resources
from pathlib import Path
import toml
from typing import Any, MutableMapping, NamedTuple, Optional


FLAGS = flags.FLAGS


_DEFAULT_CONFIG_FILE = "_default.toml"


# we use None as a sentinel for flag not set; SetsConfig class has the actual defaults.
# CLI flags override config file (which overrides default SetsConfig).
flags.DEFINE_string(
    "delimiter", None, "Field separator in edge lists; empty means any whitespace."
)
flags.DEFINE_string(
    "comment_prefix", None, "Start of a comment in edge lists; empty disables."
)
flags.DEFINE_string(
    "member_separator", None, "Separator between members of a set in the output."
)
flags.DEFINE_integer(
    "min_set_size", None, "Sets with fewer members are not written.", lower_bound=1
)
flags.DEFINE_bool("sort_output", None, "Whether to sort members and sets on output.")
flags.DEFINE_string("output_file", None, "Output filename ('-' means stdout).")


class SetsConfig(NamedTuple):
    delimiter: str = ""
    comment_prefix: str = "#"
    member_separator: str = " "
    min_set_size: int = 1
    sort_output: bool = True
    output_file: str = "-"

    @property
    def writes_to_stdout(self) -> bool:
        return self.output_file == "-"

    def validate(self):
        if self.min_set_size < 1:
            raise ValueError("'min_set_size' must be 1 or more")
        if not self.member_separator:
            raise ValueError("'member_separator' must not be empty")
        if self.delimiter and self.delimiter == self.comment_prefix:
            raise ValueError(
                f"'delimiter' and 'comment_prefix' are both {self.delimiter!r}"
            )
        return self


_BASIC_STRING_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\b": "\\b",
    "\t": "\\t",
    "\n": "\\n",
    "\f": "\\f",
    "\r": "\\r",
}


def _is_control(ch: str) -> bool:
    return ord(ch) < 0x20 or ord(ch) == 0x7F


def _dump_str(v: str) -> str:
    # toml's own _dump_str emits \x escapes, which toml itself rejects on load
    if "'" not in v and not any(_is_control(ch) for ch in v):
        return f"'{v}'"
    # the toml decoder reads a basic string opening with two quotes as """
    if v.startswith('""'):
        raise ValueError(f"Unable to write {v!r} as toml")
    escaped = "".join(
        _BASIC_STRING_ESCAPES.get(ch, f"\\u{ord(ch):04x}" if _is_control(ch) else ch)
        for ch in v
    )
    return f'"{escaped}"'


class _SetsConfigEncoder(toml.TomlEncoder):
    def __init__(self):
        super().__init__()
        self.dump_funcs[str] = _dump_str


def write(dest: Path, config: SetsConfig):
    toml_cfg = {
        "delimiter": config.delimiter,
        "comment_prefix": config.comment_prefix,
        "member_separator": config.member_separator,
        "min_set_size": config.min_set_size,
        "sort_output": config.sort_output,
        "output_file": config.output_file,
    }
    dest.write_text(
        toml.dumps(toml_cfg, encoder=_SetsConfigEncoder()), encoding="utf-8"
    )


def _resolve_config(config_file: Optional[Path] = None) -> MutableMapping[str, Any]:
    if config_file is None:
        data_dir = resources.files("disjoint_hash_set.data")
        return toml.loads((data_dir / _DEFAULT_CONFIG_FILE).read_text(encoding="utf-8"))
    return toml.load(config_file)


_DEFAULT_CONFIG = SetsConfig()


def _pop_flag(config: MutableMapping[str, Any], name: str) -> Any:
    config_value = config.pop(name, None)
    flag_value = getattr(FLAGS, name)
    if config_value is None and flag_value is None:
        return getattr(_DEFAULT_CONFIG, name)
    return flag_value if flag_value is not None else config_value


def load(config_file: Optional[Path] = None) -> SetsConfig:
    config = _resolve_config(config_file)

    # CLI flags will take precedence over the config file
    delimiter = str(_pop_flag(config, "delimiter"))
    comment_prefix = str(_pop_flag(config, "comment_prefix"))
    member_separator = str(_pop_flag(config, "member_separator"))
    min_set_size = int(_pop_flag(config, "min_set_size"))
    sort_output = bool(_pop_flag(config, "sort_output"))
    output_file = str(_pop_flag(config, "output_file"))

    if config:
        raise ValueError(f"Unexpected config: {config}")

    return SetsConfig(
        delimiter=delimiter,
        comment_prefix=comment_prefix,
        member_separator=member_separator,
        min_set_size=min_set_size,
        sort_output=sort_output,
        output_file=output_file,
    ).validate()
