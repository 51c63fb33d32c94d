"""yakp - Helm deployment plugin for CI pipelines.

Reads deployment settings from ``PLUGIN_*`` / ``HELM_*`` environment
variables, writes a kube config for the target cluster and runs
``helm upgrade -i`` (optionally after ``kubectl delete jobs``).
"""

try:
    from importlib.metadata import version

    __version__ = version("yakp")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
