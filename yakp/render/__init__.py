"""Credentials-file rendering (kube config)."""

from yakp.render.renderer import (
    KUBECONFIG_TEMPLATE,
    kubeconfig_path,
    render_kubeconfig,
    render_template,
    write_kubeconfig,
)

__all__ = [
    "KUBECONFIG_TEMPLATE",
    "kubeconfig_path",
    "render_kubeconfig",
    "render_template",
    "write_kubeconfig",
]
