"""Tests for the collectors.yaml loader."""

from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from status_collector.collectors.loader import CheckDef, load_registry, parse_check
from status_collector.collectors.registry import CollectorRegistry


class TestParseCheck:
    def test_defaults(self) -> None:
        check = parse_check({"name": "web", "url": "https://example.com"})
        assert check == CheckDef(name="web", type="http", url="https://example.com")
        assert check.timeout_ms == 10_000
        assert check.port == 443

    def test_tcp_port(self) -> None:
        check = parse_check({"name": "db", "type": "tcp", "hostname": "db.local", "port": "5432"})
        assert check.port == 5432

    def test_missing_name(self) -> None:
        with pytest.raises(ValueError, match="name"):
            parse_check({"type": "dns", "hostname": "localhost"})

    def test_unknown_type(self) -> None:
        with pytest.raises(ValueError, match="Unknown check type"):
            parse_check({"name": "x", "type": "foobar"})

    def test_http_needs_url(self) -> None:
        with pytest.raises(ValueError, match="url"):
            parse_check({"name": "x", "type": "http"})

    def test_tls_needs_hostname(self) -> None:
        with pytest.raises(ValueError, match="hostname"):
            parse_check({"name": "x", "type": "tls"})


class TestLoadRegistry:
    def test_loads_all(self, collectors_yaml: Path) -> None:
        registry = load_registry(collectors_yaml)
        assert registry.list_names() == ["infra.db", "infra.dns", "web.api.health", "web.api.tls"]
        assert all(callable(c.action) for c in registry.select())

    def test_into_existing_registry(self, collectors_yaml: Path, registry: CollectorRegistry) -> None:
        registry.register("custom.check", lambda: "ok")
        result = load_registry(collectors_yaml, registry)
        assert result is registry
        assert "custom.check" in registry
        assert len(registry) == 5

    def test_missing_file(self, tmp_path: Path) -> None:
        registry = load_registry(tmp_path / "nope.yaml")
        assert registry.list_names() == []

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.yaml"
        path.write_text("collectors: [unclosed")
        assert load_registry(path).list_names() == []

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty.yaml"
        path.write_text("")
        assert load_registry(path).list_names() == []

    def test_skips_malformed(self, tmp_path: Path) -> None:
        path = tmp_path / "collectors.yaml"
        path.write_text(yaml.dump({"collectors": [
            {"name": "good", "type": "dns", "hostname": "localhost"},
            {"type": "dns", "hostname": "localhost"},
            {"name": "weird", "type": "smtp", "hostname": "mail"},
            "not a mapping",
        ]}))
        assert load_registry(path).list_names() == ["good"]

    @pytest.mark.parametrize("content", ["- name: a\n  type: dns\n", "just a string\n", "42\n"])
    def test_non_mapping_top_level(self, tmp_path: Path, content: str) -> None:
        path = tmp_path / "collectors.yaml"
        path.write_text(content)
        assert load_registry(path).list_names() == []
