"""
Run settings for the command-line generator.

Settings come from built-in defaults, then an optional JSON file, then
the command line; later sources win. A config file looks like::

    {
      "context_length": 4,
      "output_length": 500,
      "input_path": "data/corpus.txt",
      "seed": 0,
      "encoding": "utf-8"
    }
"""

import json

from .errors import ConfigError

DEFAULTS = {
    "context_length": None,
    "output_length": None,
    "input_path": None,
    "seed": None,
    "encoding": "utf-8",
    "quiet": False,
}


def load_config(path):
    """Read a JSON config file and return the known settings it sets."""
    with open(path, encoding="utf-8") as f:
        try:
            data = json.load(f)
        except ValueError as e:
            raise ConfigError("Config file {} is not valid JSON: {}".format(path, e))
    if not isinstance(data, dict):
        raise ConfigError("Config file {} must hold a JSON object".format(path))
    unknown = sorted(set(data) - set(DEFAULTS))
    if unknown:
        raise ConfigError("Unknown config keys in {}: {}".format(path, ", ".join(unknown)))
    return data


def resolve_config(overrides, path=None):
    """
    Merge defaults, the config file at ``path`` and ``overrides``.

    ``None`` values in ``overrides`` mean "not given" and do not replace
    earlier sources. The merged settings are validated before returning.
    """
    config = dict(DEFAULTS)
    if path:
        config.update(load_config(path))
    for key, value in overrides.items():
        if key in DEFAULTS and value is not None:
            config[key] = value
    validate(config)
    return config


def _positive_int(config, key):
    value = config.get(key)
    if value is None:
        raise ConfigError("Missing required setting: {}".format(key))
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ConfigError("{} must be a positive integer, got {!r}".format(key, value))


def validate(config):
    _positive_int(config, "context_length")
    _positive_int(config, "output_length")
    if not config.get("input_path"):
        raise ConfigError("Missing required setting: input_path")
    for key in ("input_path", "encoding"):
        if not isinstance(config.get(key), str):
            raise ConfigError("{} must be a string, got {!r}".format(key, config.get(key)))
    if not isinstance(config.get("quiet"), bool):
        raise ConfigError("quiet must be true or false, got {!r}".format(config.get("quiet")))
    seed = config.get("seed")
    if seed is not None and (isinstance(seed, bool) or not isinstance(seed, int)):
        raise ConfigError("seed must be an integer, got {!r}".format(seed))
