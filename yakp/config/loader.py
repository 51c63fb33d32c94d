"""Build a :class:`PluginConfig` from the environment.

The run lifecycle is fixed:

1. environment load (:func:`~yakp.config.environment.load_environment`)
2. values resolution (:func:`~yakp.config.values.resolve_values`)
3. credentials-file write (:func:`~yakp.render.renderer.write_kubeconfig`)

A failure in steps 1-2 means no credentials file is written.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from yakp.config.environment import EnvSnapshot, capture_environment, load_environment
from yakp.config.models import PluginConfig
from yakp.config.values import read_raw_values, resolve_values
from yakp.render.renderer import render_kubeconfig, write_kubeconfig

logger = logging.getLogger(__name__)


def build_config(env: EnvSnapshot) -> PluginConfig:
    """Resolve fields and values from *env* without touching the filesystem."""
    fields = load_environment(env)
    values = resolve_values(read_raw_values(env), env)
    config = PluginConfig(**fields, values=values)
    logger.info(
        "Loaded config: release=%s chart=%s namespace=%s values=%d",
        config.release,
        config.chart,
        config.namespace,
        len(config.values),
    )
    return config


def write_credentials(config: PluginConfig, *, home: Optional[Path] = None) -> Path:
    """Render and write the kube config for *config*."""
    text = render_kubeconfig(
        master=config.master,
        namespace=config.namespace,
        skip_tls=config.skip_tls,
        token=config.token.get_secret_value(),
    )
    return write_kubeconfig(text, home=home)


def load_config(
    env: Optional[EnvSnapshot] = None,
    *,
    home: Optional[Path] = None,
    write_credentials_file: bool = True,
) -> PluginConfig:
    """Run the full load sequence and return the read-only config.

    Parameters
    ----------
    env:
        Environment snapshot.  Defaults to :func:`capture_environment`.
    home:
        Override for the home directory (default ``Path.home()``).
    write_credentials_file:
        Skip the credentials write when *False* (dry runs).
    """
    if env is None:
        env = capture_environment()

    config = build_config(env)
    if write_credentials_file:
        write_credentials(config, home=home)
    return config
