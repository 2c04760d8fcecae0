"""Resolve ``GenerationParameters`` from plain mappings or the environment.

This is the only module that reads configuration sources; the ``cave`` package
takes already-resolved parameters.

Environment variables use the ``CAVE_`` prefix plus the upper-cased field name
(``CAVE_WIDTH=64``, ``CAVE_SEED_MODE=fixed``, ``CAVE_REQUIRE_GOAL_REACHABLE=1``).
A ``.env`` file in the working directory is loaded first; variables already set
in the process environment win.
"""
from __future__ import annotations

import os
from typing import Any, Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .cave.config import SEED_MODES, GenerationParameters
from .errors import ConfigurationInvalid, ConfigurationMissing
from .logging_utils import get_logger
from .validation import validate, with_coercion

log = get_logger("cavecrawl.config")

ENV_PREFIX = "CAVE_"

GENERATION_SCHEMA = {
    'width': ('int', False, {'min': 8, 'max': 1024}),
    'height': ('int', False, {'min': 8, 'max': 1024}),
    'seed': ('int', False, {'min': 0}),
    'seed_mode': ('str', False, {'choices': SEED_MODES}),
    'noise_scale': ('float', False, {'min': 0.0}),
    'threshold': ('float', False, {}),
    'min_region_size': ('int', False, {'min': 0}),
    'wall_noise_scale': ('float', False, {'min': 0.0}),
    'wall_noise_threshold': ('float', False, {}),
    'wall_seed_jitter': ('float', False, {'min': 0.0}),
    'interior_wall_keep_away': ('int', False, {'min': 0}),
    'wall_smooth_iterations': ('int', False, {'min': 0, 'max': 32}),
    'ca_birth': ('int', False, {'min': 0, 'max': 8}),
    'ca_death': ('int', False, {'min': 0, 'max': 8}),
    'treasure_count': ('int', False, {'min': 0}),
    'enemy_count': ('int', False, {'min': 0}),
    'wall_break_threshold': ('int', False, {'min': 1}),
    'max_placement_attempts': ('int', False, {'min': 1}),
    'max_generation_attempts': ('int', False, {'min': 1}),
    'require_goal_reachable': ('bool', False, {}),
}

ENV_SCHEMA = with_coercion(GENERATION_SCHEMA)


def parameters_from_mapping(
    data: Optional[Mapping[str, Any]],
    base: Optional[GenerationParameters] = None,
    source: str = "mapping",
) -> GenerationParameters:
    """Validate ``data`` against the generation schema and overlay it on ``base``.

    Unknown keys are ignored. A mapping with no known parameter at all raises
    ``ConfigurationMissing``; the first bad field raises ``ConfigurationInvalid``.
    """
    if not data:
        raise ConfigurationMissing(source)
    schema = ENV_SCHEMA if source == "environment" else GENERATION_SCHEMA
    ok, res = validate(dict(data), schema)
    if not ok:
        raise ConfigurationInvalid(res['field'], res['error'], res['code'])
    if not res:
        raise ConfigurationMissing(source, f"no known generation parameter in {source}")
    params = (base or GenerationParameters()).replace(**res)
    return params.validate()


def parameters_from_env(
    environ: Optional[Mapping[str, str]] = None,
    load_env_file: bool = True,
    base: Optional[GenerationParameters] = None,
) -> GenerationParameters:
    """Collect ``CAVE_*`` variables into parameters; raises ``ConfigurationMissing`` when none are set."""
    if load_env_file:
        load_dotenv(find_dotenv(usecwd=True))
    env = os.environ if environ is None else environ
    collected = {}
    for key, value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        name = key[len(ENV_PREFIX):].lower()
        if name in GENERATION_SCHEMA:
            collected[name] = value
    if not collected:
        raise ConfigurationMissing("environment", f"no {ENV_PREFIX}* variables set")
    params = parameters_from_mapping(collected, base=base, source="environment")
    log.debug(event="parameters_loaded", source="environment", fields=",".join(sorted(collected)))
    return params


__all__ = ["GENERATION_SCHEMA", "ENV_PREFIX", "parameters_from_mapping", "parameters_from_env"]
