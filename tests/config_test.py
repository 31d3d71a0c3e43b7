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

from absl.testing import flagsaver
from disjoint_hash_set import config
from disjoint_hash_set.config import SetsConfig
from pathlib import Path
import pytest
from test_helper import locate_test_file, mkdtemp


@pytest.mark.parametrize(
    "config_file",
    [
        None,  # the default config file
        "sets_config.toml",
    ],
)
def test_read_write_config(config_file):
    tmp_dir = mkdtemp()
    if config_file:
        config_file = locate_test_file(config_file)
        tmp_file = tmp_dir / config_file.name
    else:
        tmp_file = tmp_dir / "the_default.toml"

    original = config.load(config_file)
    config.write(tmp_file, original)
    reloaded = config.load(tmp_file)

    assert original == reloaded


@pytest.mark.parametrize(
    "separator",
    [
        "\t",
        "\\",
        " | ",
        "'",
        '"',
        "\\x",
        "\\u0041",
        "é",
        "→",
        '"' + "'",
        "a\nb",
        "\x1b",
    ],
)
def test_write_load_round_trips_separators(separator):
    original = SetsConfig(delimiter=separator, member_separator=separator)
    config_file = mkdtemp() / "config.toml"
    config.write(config_file, original)
    assert config.load(config_file) == original


def test_write_rejects_unreadable_string():
    config_file = mkdtemp() / "config.toml"
    with pytest.raises(ValueError, match="Unable to write"):
        config.write(config_file, SetsConfig(member_separator='""' + "'"))


def test_default_config_matches_defaults():
    assert config.load() == SetsConfig()


def test_load_config_file():
    assert config.load(locate_test_file("sets_config.toml")) == SetsConfig(
        delimiter=",",
        comment_prefix="",
        member_separator=",",
        min_set_size=2,
        sort_output=True,
        output_file="-",
    )


@flagsaver.flagsaver(min_set_size=3, member_separator="|", sort_output=False)
def test_flags_override_config_file():
    sets_config = config.load(locate_test_file("sets_config.toml"))
    assert sets_config.min_set_size == 3
    assert sets_config.member_separator == "|"
    assert not sets_config.sort_output
    # not set by flag, comes from the file
    assert sets_config.delimiter == ","


@flagsaver.flagsaver(delimiter="")
def test_empty_flag_still_overrides():
    sets_config = config.load(locate_test_file("sets_config.toml"))
    assert sets_config.delimiter == ""


def test_unexpected_config_key():
    config_file = mkdtemp() / "bad.toml"
    config_file.write_text('min_set_size = 2\nflavor = "grape"\n')
    with pytest.raises(ValueError, match="Unexpected config"):
        config.load(config_file)


@pytest.mark.parametrize(
    "bad_config, message",
    [
        (SetsConfig(min_set_size=0), "min_set_size"),
        (SetsConfig(member_separator=""), "member_separator"),
        (SetsConfig(delimiter="#", comment_prefix="#"), "both"),
    ],
)
def test_validate(bad_config, message):
    with pytest.raises(ValueError, match=message):
        bad_config.validate()


def test_writes_to_stdout():
    assert SetsConfig().writes_to_stdout
    assert not SetsConfig(output_file="sets.txt").writes_to_stdout
