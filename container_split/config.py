"""Configuration loading from CLI args, env vars, and optional YAML file."""

import logging
import os
from dataclasses import dataclass, field

import yaml

from container_split.errors import ConfigError

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class ClassificationRule:
    pattern: str   # substring looked for in the decoded log text
    label: str     # e.g. "api-server"


# Order is precedence: the first rule that matches a line wins.
DEFAULT_RULES = (
    ClassificationRule("Starting controllers on", "controllers"),
    ClassificationRule('msg="start registry" distribution_version=', "docker-registry"),
    ClassificationRule("Registered admission plugin", "api-server"),
    ClassificationRule("Starting template router", "router"),
    ClassificationRule("etcdserver: setting up the initial cluster", "etcd"),
)


@dataclass(frozen=True)
class Config:
    output_dir: str = "containers"
    rules: tuple[ClassificationRule, ...] = field(default=DEFAULT_RULES)
    log_level: str = "WARNING"


def load_yaml_config(path: str | None) -> dict:
    """Load overrides from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid YAML in {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config file {path} must contain a mapping")
    logger.info("Loaded YAML config from %s", path)
    return data


def parse_rules(raw) -> tuple[ClassificationRule, ...]:
    """Turn the YAML ``rules`` list into ClassificationRules, keeping order."""
    if not isinstance(raw, list):
        raise ConfigError("'rules' must be a list of {pattern, label} mappings")
    rules = []
    for i, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigError(f"rule #{i + 1} must be a mapping")
        pattern = entry.get("pattern")
        label = entry.get("label")
        if not isinstance(pattern, str) or not pattern:
            raise ConfigError(f"rule #{i + 1}: 'pattern' must be a non-empty string")
        if not isinstance(label, str) or not label:
            raise ConfigError(f"rule #{i + 1}: 'label' must be a non-empty string")
        rules.append(ClassificationRule(pattern=pattern, label=label))
    return tuple(rules)


def load_config(cli_args, yaml_data: dict) -> Config:
    """Build Config from CLI args, env vars, and parsed YAML data.

    ``output_dir`` precedence is CLI > YAML > ``CONTAINERS_DIR`` > default.
    """
    output_dir = getattr(cli_args, "output_dir", None)
    if not output_dir:
        output_dir = yaml_data.get("output_dir") or os.environ.get(
            "CONTAINERS_DIR", Config.output_dir
        )
    if not isinstance(output_dir, str):
        raise ConfigError("'output_dir' must be a string")

    rules = DEFAULT_RULES
    if "rules" in yaml_data:
        rules = parse_rules(yaml_data["rules"])

    if getattr(cli_args, "verbose", False):
        log_level = "INFO"
    else:
        log_level = os.environ.get("LOG_LEVEL", Config.log_level).strip().upper()
        if log_level not in LOG_LEVELS:
            logger.warning("Unknown LOG_LEVEL %r, using %s", log_level, Config.log_level)
            log_level = Config.log_level

    return Config(output_dir=output_dir, rules=rules, log_level=log_level)
