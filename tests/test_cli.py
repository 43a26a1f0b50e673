"""Tests for the command line interface."""

import pytest

from bucketfs.cli import main_async, parse_args
from bucketfs.factory import Factory
from bucketfs.filesystem import VOID_FILE

from conftest import BUCKET_URL, NOW, FakeS3Transport


@pytest.fixture
def env(monkeypatch):
    monkeypatch.setenv("S3_URL", BUCKET_URL)
    monkeypatch.setenv("S3_REGION", "eu-west-1")


def factory_for(transport: FakeS3Transport) -> Factory:
    return Factory(transport=transport, clock=lambda: NOW)


class TestCli:

    def test_parse_args(self):
        args = parse_args(["--region", "eu-west-1", "ls", "a/"])

        assert args.command == "ls"
        assert args.path == "a/"
        assert args.region == "eu-west-1"
        assert args.log_level == "WARNING"

    @pytest.mark.asyncio
    async def test_ls(self, env, transport: FakeS3Transport, capsys):
        transport.objects.update({"l1/l2/file1.txt": b"1", "l1/file2.txt": b"2"})

        code = await main_async(["ls", "l1"], factory=factory_for(transport))

        assert code == 0
        assert sorted(capsys.readouterr().out.split()) == ["file2.txt", "l2/"]

    @pytest.mark.asyncio
    async def test_cat(self, env, transport: FakeS3Transport, capsys):
        transport.objects["a/b.txt"] = b"hello"

        code = await main_async(["cat", "a/b.txt"], factory=factory_for(transport))

        assert code == 0
        assert capsys.readouterr().out == "hello"

    @pytest.mark.asyncio
    async def test_cat_missing_file(self, env, transport: FakeS3Transport):
        assert await main_async(["cat", "missing"], factory=factory_for(transport)) == 1

    @pytest.mark.asyncio
    async def test_put_and_rm(self, env, transport: FakeS3Transport, tmp_path):
        local = tmp_path / "docs"
        (local / "sub").mkdir(parents=True)
        (local / "readme.txt").write_bytes(b"readme")
        (local / "sub" / "notes.txt").write_bytes(b"notes")

        assert await main_async(["put", str(local)], factory=factory_for(transport)) == 0
        assert transport.objects["docs/readme.txt"] == b"readme"
        assert transport.objects["docs/sub/notes.txt"] == b"notes"
        assert f"docs/{VOID_FILE}" in transport.objects

        assert await main_async(["rm", "docs"], factory=factory_for(transport)) == 0
        assert transport.objects == {}

    @pytest.mark.asyncio
    async def test_put_renames(self, env, transport: FakeS3Transport, tmp_path):
        local = tmp_path / "file.txt"
        local.write_bytes(b"x")

        assert await main_async(["put", str(local), "renamed.txt"], factory=factory_for(transport)) == 0
        assert transport.objects == {"renamed.txt": b"x"}

    @pytest.mark.asyncio
    async def test_missing_configuration(self, monkeypatch, transport: FakeS3Transport):
        monkeypatch.delenv("S3_URL", raising=False)
        monkeypatch.delenv("S3_REGION", raising=False)

        assert await main_async(["ls"], factory=factory_for(transport)) == 1
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_invalid_configuration(self, env, monkeypatch, transport: FakeS3Transport):
        monkeypatch.setenv("S3_TIMEOUT_SECONDS", "soon")

        assert await main_async(["ls"], factory=factory_for(transport)) == 1
        assert transport.requests == []
