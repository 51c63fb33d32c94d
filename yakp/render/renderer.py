"""Kube config renderer: binds ``{{ name }}`` tokens in a fixed template.

It performs **text-level** token replacement so the document shape is
reproduced byte-for-byte; only the four bound values change between runs.
Values are inserted verbatim and never re-scanned.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Dict, Optional, Union

from yakp.errors import (
    DirectoryCreationFailed,
    FileWriteFailed,
    HomeDirectoryUnavailable,
    TemplateRenderFailed,
)

logger = logging.getLogger(__name__)

# ── constants ────────────────────────────────────────────────────────

#: Credentials template.  No trailing newline.
KUBECONFIG_TEMPLATE: str = (
    "apiVersion: v1\n"
    "clusters:\n"
    "- cluster:\n"
    "    insecure-skip-tls-verify: {{ skip_tls }}\n"
    "    server: {{ master }}\n"
    "  name: helm\n"
    "contexts:\n"
    "- context:\n"
    "    cluster: helm\n"
    "    namespace: {{ namespace }}\n"
    "    user: helm\n"
    "  name: helm\n"
    "current-context: helm\n"
    "kind: Config\n"
    "preferences: {}\n"
    "users:\n"
    "- name: helm\n"
    "  user:\n"
    "    token: {{ token }}"
)

#: ``{{ name }}`` placeholder.  ``preferences: {}`` has no word inside.
PLACEHOLDER_PATTERN = re.compile(r"\{\{\s*(\w+)\s*\}\}")

KUBE_DIR_NAME = ".kube"
KUBECONFIG_NAME = "config"

#: The file carries a bearer token.
KUBECONFIG_MODE = 0o600

Scalar = Union[str, bool]


# ── public API ───────────────────────────────────────────────────────


def render_template(template_text: str, bindings: Dict[str, Scalar]) -> str:
    """Replace every ``{{ name }}`` in *template_text* from *bindings*.

    Booleans render as ``true`` / ``false``.

    Raises
    ------
    TemplateRenderFailed
        If the template names a placeholder missing from *bindings*.
    """

    def _substitute(match: "re.Match[str]") -> str:
        name = match.group(1)
        if name not in bindings:
            raise TemplateRenderFailed(name)
        value = bindings[name]
        if isinstance(value, bool):
            return "true" if value else "false"
        return str(value)

    return PLACEHOLDER_PATTERN.sub(_substitute, template_text)


def render_kubeconfig(master: str, namespace: str, skip_tls: bool, token: str) -> str:
    """Render :data:`KUBECONFIG_TEMPLATE` for one cluster/context/user."""
    return render_template(
        KUBECONFIG_TEMPLATE,
        {
            "master": master,
            "namespace": namespace,
            "skip_tls": skip_tls,
            "token": token,
        },
    )


def kubeconfig_path(home: Optional[Path] = None) -> Path:
    """Return ``<home>/.kube/config``.

    Raises :class:`HomeDirectoryUnavailable` if the home directory of the
    invoking user cannot be determined.
    """
    if home is None:
        try:
            home = Path.home()
        except (RuntimeError, KeyError) as exc:
            raise HomeDirectoryUnavailable() from exc
    return Path(home) / KUBE_DIR_NAME / KUBECONFIG_NAME


def _private_opener(path: str, flags: int) -> int:
    return os.open(path, flags, KUBECONFIG_MODE)


def write_kubeconfig(text: str, *, home: Optional[Path] = None) -> Path:
    """Write *text* to the kube config path, replacing any existing file.

    The ``.kube`` directory is created if absent.  The file is restricted
    to :data:`KUBECONFIG_MODE` before the token is written.  Returns the
    written path.
    """
    path = kubeconfig_path(home)

    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise DirectoryCreationFailed(path.parent) from exc

    try:
        with open(path, "w", encoding="utf-8", opener=_private_opener) as fh:
            # An existing file keeps its old mode through O_CREAT.
            os.fchmod(fh.fileno(), KUBECONFIG_MODE)
            fh.write(text)
    except OSError as exc:
        raise FileWriteFailed(path) from exc

    logger.info("Wrote kube config to %s", path)
    return path
