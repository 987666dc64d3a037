import os
from typing import Optional

import yaml

from prlabeler_core.errors import ConfigError
from prlabeler_core.operations import Operations, parse_operations
from prlabeler_core.rules import PATTERN_KEYS, Rule, parse_rules

DEFAULT_CONFIG: dict = {
    "config_path": ".github/labeler.yml",
    "repository": None,
    "event_name": None,
    "event_path": None,
    "dry_run": False,
}

# Settings that GitHub Actions passes through the environment.
_ENV_KEYS = {
    "config_path": "INPUT_CONFIG_PATH",
    "repository": "GITHUB_REPOSITORY",
    "event_name": "GITHUB_EVENT_NAME",
    "event_path": "GITHUB_EVENT_PATH",
}


def load_config(cli_overrides: Optional[dict] = None) -> dict:
    """
    Resolve run settings by merging (in order of precedence):
      1. Built-in defaults
      2. GitHub Actions environment variables
      3. CLI argument overrides
    """
    config = dict(DEFAULT_CONFIG)

    for key, env_var in _ENV_KEYS.items():
        value = os.environ.get(env_var)
        if value:
            config[key] = value

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    config["github_token"] = os.environ.get("INPUT_GITHUB_TOKEN") or os.environ.get("GITHUB_TOKEN")

    return config


class _LabelerLoader(yaml.SafeLoader):
    """Safe loader that keeps mapping keys and patterns exactly as written.

    Plain YAML would turn a label like `1.10` into the float 1.1 or `on` into
    True, and a title pattern like `2024` into an int.
    """

    def construct_mapping(self, node, deep=False):
        self.flatten_mapping(node)
        mapping = {}
        for key_node, value_node in node.value:
            if not isinstance(key_node, yaml.ScalarNode):
                raise yaml.constructor.ConstructorError(
                    "while constructing a mapping", node.start_mark, "found a non-scalar key", key_node.start_mark
                )
            key = self.construct_scalar(key_node)
            if (
                key in PATTERN_KEYS
                and isinstance(value_node, yaml.ScalarNode)
                and value_node.tag != "tag:yaml.org,2002:null"
            ):
                mapping[key] = self.construct_scalar(value_node)
            else:
                mapping[key] = self.construct_object(value_node, deep=deep)
        return mapping


def _load_yaml(content: bytes | str) -> object:
    try:
        return yaml.load(content, Loader=_LabelerLoader)
    except yaml.YAMLError as e:
        raise ConfigError(f"failed to unmarshal labeler config: {e}") from e


def load_rules(content: bytes | str) -> dict[str, Rule]:
    """Parse labeler rules from the raw YAML config file."""
    return parse_rules(_load_yaml(content))


def load_operations(content: bytes | str) -> dict[str, Operations]:
    """Parse a workflow-state operations config from raw YAML."""
    return parse_operations(_load_yaml(content))
