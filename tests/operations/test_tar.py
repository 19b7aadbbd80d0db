import asyncio
import os
import shutil
import uuid

import pytest

from shellguard.core.errors import (
    InvalidArchivePathError,
    InvalidExcludePatternError,
    InvalidSourcePathError,
    InvalidTarModeError,
)
from shellguard.operations.tar import build_tar_args, safe_tar
from tests.helpers import requires_binary


class TestBuildTarArgs:
    def test_create(self):
        assert build_tar_args("c", "/var/backups/site.tar", "/var/www/html") == [
            "-c",
            "-f",
            "/var/backups/site.tar",
            "-C",
            "/var/www/html",
            ".",
        ]

    def test_extract_gzip(self):
        assert build_tar_args(
            "x", "/tmp/site.tar.gz", "/var/www/restore", gzip=True
        ) == ["-x", "-z", "-f", "/tmp/site.tar.gz", "-C", "/var/www/restore"]

    def test_excludes(self):
        args = build_tar_args(
            "c",
            "/tmp/panel.tar",
            "/root/vps-panel",
            excludes=["node_modules", "*.log", "cache/*"],
        )
        assert args == [
            "-c",
            "-f",
            "/tmp/panel.tar",
            "--exclude=node_modules",
            "--exclude=*.log",
            "--exclude=cache/*",
            "-C",
            "/root/vps-panel",
            ".",
        ]

    def test_single_exclude_string(self):
        args = build_tar_args("c", "/tmp/a.tar", "/tmp/src", excludes="*.log")
        assert "--exclude=*.log" in args


class TestSafeTarValidation:
    @pytest.mark.parametrize(
        "mode,archive,source,error,message",
        [
            ("t", "/tmp/a.tar", "/var/www", InvalidTarModeError, "Invalid tar mode"),
            ("cz", "/tmp/a.tar", "/var/www", InvalidTarModeError, "Invalid tar mode"),
            ("-c", "/tmp/a.tar", "/var/www", InvalidTarModeError, "Invalid tar mode"),
            (
                "c",
                "/etc/a.tar",
                "/var/www",
                InvalidArchivePathError,
                "Invalid archive path",
            ),
            (
                "c",
                "/tmp/../etc/a.tar",
                "/var/www",
                InvalidArchivePathError,
                "Invalid archive path",
            ),
            ("c", "a.tar", "/var/www", InvalidArchivePathError, "Invalid archive path"),
            (
                "c",
                "/tmp/a.tar",
                "/var/www/../../etc",
                InvalidSourcePathError,
                "Invalid source path",
            ),
            ("c", "/tmp/a.tar", "/etc", InvalidSourcePathError, "Invalid source path"),
            (
                "x",
                "/tmp/a.tar",
                "/var/wwwevil",
                InvalidSourcePathError,
                "Invalid source path",
            ),
        ],
    )
    def test_rejects_before_spawning(self, exec_spy, mode, archive, source, error, message):
        spy = exec_spy()
        with pytest.raises(error, match=message):
            asyncio.run(safe_tar(mode, archive, source))
        spy.assert_not_awaited()

    @pytest.mark.parametrize(
        "exclude",
        [
            "--checkpoint-action=exec=sh",
            "-X",
            "a;b",
            "$(id)",
            "with space",
            "",
        ],
    )
    def test_rejects_exclude_pattern(self, exec_spy, exclude):
        spy = exec_spy()
        with pytest.raises(InvalidExcludePatternError):
            asyncio.run(safe_tar("c", "/tmp/a.tar", "/var/www", excludes=[exclude]))
        spy.assert_not_awaited()

    def test_rejection_is_reported(self, exec_spy, sentry_capture):
        exec_spy()
        with pytest.raises(InvalidSourcePathError):
            asyncio.run(safe_tar("c", "/tmp/a.tar", "/etc"))
        event = sentry_capture.call_args[0][0]
        assert event["tags"]["operation"] == "tar"
        assert event["extra"]["params"]["source_path"] == "/etc"


def test_safe_tar_invokes_tar(exec_spy):
    spy = exec_spy()
    asyncio.run(safe_tar("c", "/tmp/a.tar.gz", "/var/www/html", gzip=True, timeout=9))
    args, kwargs = spy.call_args
    assert args == (
        "tar",
        ["-c", "-z", "-f", "/tmp/a.tar.gz", "-C", "/var/www/html", "."],
    )
    assert kwargs["timeout"] == 9


@requires_binary("tar")
def test_create_and_extract_roundtrip():
    work = f"/tmp/shellguard-tar-{uuid.uuid4().hex}"
    source = os.path.join(work, "src")
    restore = os.path.join(work, "restore")
    archive = os.path.join(work, "site.tar.gz")
    os.makedirs(os.path.join(source, "node_modules"))
    os.makedirs(restore)
    try:
        with open(os.path.join(source, "index.html"), "w") as f:
            f.write("<h1>hello</h1>")
        with open(os.path.join(source, "debug.log"), "w") as f:
            f.write("noise")
        with open(os.path.join(source, "node_modules", "dep.js"), "w") as f:
            f.write("module.exports = {}")

        created = asyncio.run(
            safe_tar(
                "c", archive, source, gzip=True, excludes=["node_modules", "*.log"]
            )
        )
        assert created.exit_code == 0, created.stderr

        extracted = asyncio.run(safe_tar("x", archive, restore, gzip=True))
        assert extracted.exit_code == 0, extracted.stderr

        assert sorted(os.listdir(restore)) == ["index.html"]
        with open(os.path.join(restore, "index.html")) as f:
            assert f.read() == "<h1>hello</h1>"
    finally:
        shutil.rmtree(work, ignore_errors=True)
