"""
Tests for the allow-list validators.

Each validator must accept well-formed values for its context, reject anything
carrying shell syntax or traversal, and answer False (never raise) for input
of the wrong type.
"""

import pytest

from shellguard.core.validators import (
    normalize_path,
    validate_docker_name,
    validate_hostname,
    validate_path,
    validate_path_component,
    validate_pg_identifier,
)

WRONG_TYPES = [None, 123, 1.5, b"users", ["users"], {"name": "users"}]


class TestValidatePgIdentifier:
    @pytest.mark.parametrize(
        "identifier",
        ["users", "my_table", "Table123", "_private", "a", "a" * 63],
    )
    def test_accepts_identifiers(self, identifier):
        assert validate_pg_identifier(identifier) is True

    @pytest.mark.parametrize(
        "identifier",
        [
            "",
            "a" * 64,
            "123table",
            "0users",
            "table;drop",
            "table-name",
            "table.name",
            "table'name",
            "'; DROP TABLE users;--",
            "table; SELECT * FROM users",
            "users\n",
            "us ers",
            "ümlaut",
        ],
    )
    def test_rejects_identifiers(self, identifier):
        assert validate_pg_identifier(identifier) is False

    @pytest.mark.parametrize("value", WRONG_TYPES)
    def test_wrong_type_is_false(self, value):
        assert validate_pg_identifier(value) is False


class TestValidateDockerName:
    @pytest.mark.parametrize(
        "name",
        [
            "nginx",
            "my-container",
            "container_name",
            "container.name",
            "vps-panel-backend",
            "0abc123def",
        ],
    )
    def test_accepts_names(self, name):
        assert validate_docker_name(name) is True

    @pytest.mark.parametrize(
        "name",
        [
            "",
            "-container",
            "_container",
            ".container",
            "MyContainer",
            "NGINX",
            "container;rm -rf /",
            "container`whoami`",
            "container$(id)",
            "nginx:latest",
            "library/nginx",
            "a" * 256,
        ],
    )
    def test_rejects_names(self, name):
        assert validate_docker_name(name) is False

    def test_length_limit(self):
        assert validate_docker_name("a" * 255) is True

    @pytest.mark.parametrize("value", WRONG_TYPES)
    def test_wrong_type_is_false(self, value):
        assert validate_docker_name(value) is False


class TestValidateHostname:
    @pytest.mark.parametrize(
        "hostname",
        [
            "localhost",
            "postgres",
            "my-host",
            "host123",
            "db.example.com",
            "127.0.0.1",
            "a" * 63,
        ],
    )
    def test_accepts_hostnames(self, hostname):
        assert validate_hostname(hostname) is True

    @pytest.mark.parametrize(
        "hostname",
        [
            "",
            "-host",
            "host-",
            "host;injection",
            "host`cmd`",
            "host name",
            "a..b",
            ".leading",
            "trailing.",
            "sub.-bad.com",
            "a" * 64,
            ".".join(["a" * 60] * 5),
            "host\n",
        ],
    )
    def test_rejects_hostnames(self, hostname):
        assert validate_hostname(hostname) is False

    @pytest.mark.parametrize("value", WRONG_TYPES)
    def test_wrong_type_is_false(self, value):
        assert validate_hostname(value) is False


class TestValidatePath:
    @pytest.mark.parametrize(
        "path",
        [
            "/var/www/html",
            "/tmp/backup.tar.gz",
            "/root/vps-panel",
            "/",
            "/var//www",
            "/var/www/./html",
            "/tmp/file..bak",
        ],
    )
    def test_accepts_absolute_paths(self, path):
        assert validate_path(path) is True

    @pytest.mark.parametrize("path", ["var/www/html", "./test", "", "~/backups"])
    def test_rejects_relative_paths(self, path):
        assert validate_path(path) is False

    @pytest.mark.parametrize(
        "path",
        [
            "/var/www/../etc/passwd",
            "/var/www/../../etc",
            "/var/www/..",
            "/..",
            "/tmp/a/../../etc/cron.d",
        ],
    )
    def test_rejects_traversal(self, path):
        assert validate_path(path) is False

    def test_rejects_null_byte(self):
        assert validate_path("/var/www/test\0.txt") is False

    def test_allowed_roots(self):
        assert validate_path("/var/www/project", ["/var/www"]) is True
        assert validate_path("/var/www", ["/var/www"]) is True
        assert validate_path("/etc/passwd", ["/var/www"]) is False

    def test_root_match_stops_at_separator(self):
        assert validate_path("/var/www2/project", ["/var/www"]) is False
        assert validate_path("/var/wwwroot", ["/var/www"]) is False

    def test_root_match_is_case_sensitive(self):
        assert validate_path("/VAR/www/project", ["/var/www"]) is False

    def test_root_with_trailing_slash(self):
        assert validate_path("/var/www/project", ["/var/www/"]) is True

    def test_any_of_several_roots(self):
        roots = ["/var/backups", "/tmp"]
        assert validate_path("/tmp/dump.sql", roots) is True
        assert validate_path("/var/backups/db/dump.sql", roots) is True
        assert validate_path("/etc/cron.d/dump.sql", roots) is False

    def test_single_root_as_string(self):
        assert validate_path("/tmp/dump.sql", "/tmp") is True
        assert validate_path("/t", "/tmp") is False

    def test_slash_root_admits_everything(self):
        assert validate_path("/etc/passwd", ["/"]) is True

    def test_invalid_root_never_matches(self):
        assert validate_path("/var/www/project", ["var/www"]) is False

    @pytest.mark.parametrize("roots", [5, 1.5, object()])
    def test_non_iterable_roots_are_false(self, roots):
        assert validate_path("/tmp/x", roots) is False

    @pytest.mark.parametrize("value", WRONG_TYPES)
    def test_wrong_type_is_false(self, value):
        assert validate_path(value) is False


class TestNormalizePath:
    @pytest.mark.parametrize(
        "path,expected",
        [
            ("/", "/"),
            ("//var///www/", "/var/www"),
            ("/var/./www/.", "/var/www"),
            ("/var/www/..", None),
            ("var/www", None),
            ("/var/\0", None),
        ],
    )
    def test_normalize(self, path, expected):
        assert normalize_path(path) == expected


class TestValidatePathComponent:
    @pytest.mark.parametrize(
        "component", ["file.txt", "my-folder", "test_file", "backup.tar.gz"]
    )
    def test_accepts_components(self, component):
        assert validate_path_component(component) is True

    @pytest.mark.parametrize(
        "component",
        ["", ".", "..", "path/to/file", "file;rm", "file`cmd`", "a b", "x" * 256],
    )
    def test_rejects_components(self, component):
        assert validate_path_component(component) is False

    @pytest.mark.parametrize("value", WRONG_TYPES)
    def test_wrong_type_is_false(self, value):
        assert validate_path_component(value) is False
