"""Tests for yakp.render.renderer: kube config rendering and write."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from yakp.errors import (
    DirectoryCreationFailed,
    FileWriteFailed,
    HomeDirectoryUnavailable,
    TemplateRenderFailed,
)
from yakp.render.renderer import (
    KUBECONFIG_MODE,
    KUBECONFIG_TEMPLATE,
    kubeconfig_path,
    render_kubeconfig,
    render_template,
    write_kubeconfig,
)

EXPECTED = (
    "apiVersion: v1\n"
    "clusters:\n"
    "- cluster:\n"
    "    insecure-skip-tls-verify: true\n"
    "    server: https://x\n"
    "  name: helm\n"
    "contexts:\n"
    "- context:\n"
    "    cluster: helm\n"
    "    namespace: ns\n"
    "    user: helm\n"
    "  name: helm\n"
    "current-context: helm\n"
    "kind: Config\n"
    "preferences: {}\n"
    "users:\n"
    "- name: helm\n"
    "  user:\n"
    "    token: tok"
)


# ── TestRenderTemplate ───────────────────────────────────────────────


class TestRenderTemplate:
    def test_basic_substitution(self):
        assert render_template("a: {{ x }}", {"x": "1"}) == "a: 1"

    def test_whitespace_optional(self):
        assert render_template("a: {{x}}", {"x": "1"}) == "a: 1"

    def test_bool_rendering(self):
        assert render_template("{{ t }} {{ f }}", {"t": True, "f": False}) == "true false"

    def test_unbound_placeholder_raises(self):
        with pytest.raises(TemplateRenderFailed) as exc_info:
            render_template("a: {{ missing }}", {})
        assert exc_info.value.placeholder == "missing"

    def test_empty_braces_untouched(self):
        assert render_template("preferences: {}", {}) == "preferences: {}"

    def test_values_not_rescanned(self):
        assert render_template("{{ a }}", {"a": "{{ b }}", "b": "x"}) == "{{ b }}"


# ── TestRenderKubeconfig ─────────────────────────────────────────────


class TestRenderKubeconfig:
    def test_exact_document(self):
        text = render_kubeconfig(
            master="https://x", namespace="ns", skip_tls=True, token="tok"
        )
        assert text == EXPECTED

    def test_no_trailing_newline(self):
        text = render_kubeconfig("https://x", "default", False, "tok")
        assert not text.endswith("\n")

    def test_structural_lines_unchanged(self):
        text = render_kubeconfig("https://x", "ns", True, "tok")
        template_lines = KUBECONFIG_TEMPLATE.split("\n")
        rendered_lines = text.split("\n")
        assert len(template_lines) == len(rendered_lines)
        for tpl, out in zip(template_lines, rendered_lines):
            if "{{" not in tpl:
                assert tpl == out

    def test_parses_as_yaml(self):
        doc = yaml.safe_load(render_kubeconfig("https://x", "ns", False, "tok"))
        assert doc["kind"] == "Config"
        assert doc["clusters"][0]["cluster"]["server"] == "https://x"
        assert doc["clusters"][0]["cluster"]["insecure-skip-tls-verify"] is False
        assert doc["contexts"][0]["context"]["namespace"] == "ns"
        assert doc["users"][0]["user"]["token"] == "tok"
        assert doc["current-context"] == "helm"

    def test_token_inserted_verbatim(self):
        text = render_kubeconfig("https://x", "ns", False, "a&b<c>=d")
        assert text.endswith("token: a&b<c>=d")


# ── TestKubeconfigPath ───────────────────────────────────────────────


class TestKubeconfigPath:
    def test_explicit_home(self, tmp_path):
        assert kubeconfig_path(tmp_path) == tmp_path / ".kube" / "config"

    def test_default_home(self, tmp_path):
        with patch("yakp.render.renderer.Path.home", return_value=tmp_path):
            assert kubeconfig_path() == tmp_path / ".kube" / "config"

    def test_home_unavailable(self):
        with patch(
            "yakp.render.renderer.Path.home",
            side_effect=RuntimeError("Could not determine home directory."),
        ):
            with pytest.raises(HomeDirectoryUnavailable):
                kubeconfig_path()


# ── TestWriteKubeconfig ──────────────────────────────────────────────


class TestWriteKubeconfig:
    def test_creates_directory_and_file(self, tmp_path):
        path = write_kubeconfig("content", home=tmp_path)
        assert path == tmp_path / ".kube" / "config"
        assert path.read_text(encoding="utf-8") == "content"

    def test_overwrites_existing(self, tmp_path):
        kube = tmp_path / ".kube"
        kube.mkdir()
        (kube / "config").write_text("old content that is much longer\n")
        path = write_kubeconfig("new", home=tmp_path)
        assert path.read_text(encoding="utf-8") == "new"

    def test_file_mode(self, tmp_path):
        path = write_kubeconfig("content", home=tmp_path)
        assert stat.S_IMODE(path.stat().st_mode) == KUBECONFIG_MODE

    def test_directory_creation_failed(self, tmp_path):
        # A regular file where the .kube directory should go.
        (tmp_path / ".kube").write_text("not a dir")
        with pytest.raises(DirectoryCreationFailed) as exc_info:
            write_kubeconfig("content", home=tmp_path)
        assert exc_info.value.path == tmp_path / ".kube"

    def test_file_write_failed(self, tmp_path):
        with patch("builtins.open", side_effect=PermissionError("denied")):
            with pytest.raises(FileWriteFailed) as exc_info:
                write_kubeconfig("content", home=tmp_path)
        assert exc_info.value.path == Path(tmp_path) / ".kube" / "config"

    def test_new_file_private_when_opened(self, tmp_path):
        real_open = open
        seen = {}

        def _spy(file, *args, **kwargs):
            fh = real_open(file, *args, **kwargs)
            seen["mode"] = stat.S_IMODE(os.stat(file).st_mode)
            return fh

        with patch("builtins.open", side_effect=_spy):
            write_kubeconfig("token: x", home=tmp_path)
        assert seen["mode"] == KUBECONFIG_MODE

    def test_existing_file_restricted_before_write(self, tmp_path):
        kube = tmp_path / ".kube"
        kube.mkdir()
        existing = kube / "config"
        existing.write_text("old")
        os.chmod(existing, 0o644)

        real_fchmod = os.fchmod
        seen = {}

        def _spy(fd, mode):
            seen["size"] = os.fstat(fd).st_size
            real_fchmod(fd, mode)

        with patch("yakp.render.renderer.os.fchmod", side_effect=_spy):
            path = write_kubeconfig("token: x", home=tmp_path)
        assert seen["size"] == 0
        assert stat.S_IMODE(path.stat().st_mode) == KUBECONFIG_MODE
        assert path.read_text(encoding="utf-8") == "token: x"
