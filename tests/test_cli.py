"""Tests for the checkpwn command line."""

import json

import pytest
from click.testing import CliRunner

from checkpwn.cli import main, read_accounts
from checkpwn.client import CheckpwnClient
from checkpwn.config import CheckpwnConfig
from tests.fakes import RANGE_WITH_QWERTY, RANGE_WITHOUT_QWERTY, FakeHIBP


pytestmark = pytest.mark.usefixtures("isolated_env")


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def use_server(monkeypatch):
    """Route CLI clients to a FakeHIBP with no rate-limit delay."""

    def _use(server: FakeHIBP) -> FakeHIBP:
        def create_client(self):
            return CheckpwnClient(api_key=self.api_key, account_delay=0, transport=server.transport)

        monkeypatch.setattr(CheckpwnConfig, "create_client", create_client)
        return server

    return _use


def parse_json(output: str):
    start = min(i for i in (output.find("{"), output.find("[")) if i >= 0)
    return json.loads(output[start:])


class TestAccCommand:

    def test_requires_api_key(self, runner, use_server):
        server = use_server(FakeHIBP())
        result = runner.invoke(main, ["acc", "test@example.com"])
        assert result.exit_code == 1
        assert "The API key is missing" in result.output
        assert server.requests == []

    def test_not_breached(self, runner, use_server):
        use_server(FakeHIBP())
        result = runner.invoke(main, ["acc", "nobody@example.com", "-k", "key"])
        assert result.exit_code == 0
        assert "NO BREACH FOUND" in result.output

    def test_breached(self, runner, use_server):
        use_server(FakeHIBP({"/api/v3/breachedaccount/": (200, "[]")}))
        result = runner.invoke(main, ["acc", "test@example.com", "-k", "key"])
        assert result.exit_code == 1
        assert "BREACHED" in result.output

    def test_api_key_from_env(self, runner, use_server, monkeypatch):
        server = use_server(FakeHIBP())
        monkeypatch.setenv("CHECKPWN_API_KEY", "env-key")
        result = runner.invoke(main, ["acc", "nobody@example.com"])
        assert result.exit_code == 0
        assert server.requests[0].headers["hibp-api-key"] == "env-key"

    def test_invalid_api_key_json(self, runner, use_server):
        use_server(FakeHIBP({
            "/api/v3/breachedaccount/": (401, ""),
            "/api/v3/pasteaccount/": (401, ""),
        }))
        result = runner.invoke(main, ["acc", "test@example.com", "-k", "bad", "--json"])
        assert result.exit_code == 1
        data = parse_json(result.output)
        assert data["kind"] == "account"
        assert data["target"] == "test@example.com"
        assert data["error"] == "HIBP deemed the current API key invalid"

    def test_accounts_file(self, runner, use_server, tmp_path):
        server = use_server(FakeHIBP())
        accounts = tmp_path / "accounts.txt"
        accounts.write_text("one@example.com\n# skipped\n\ntwo@example.com\n")

        result = runner.invoke(main, ["acc", str(accounts), "-k", "key", "--json"])
        assert result.exit_code == 0
        data = parse_json(result.output)
        assert [d["target"] for d in data] == ["one@example.com", "two@example.com"]
        assert all(d["breached"] is False for d in data)
        assert len(server.requests) == 4


class TestPassCommand:

    def test_breached(self, runner, use_server):
        server = use_server(FakeHIBP({"/range/": (200, RANGE_WITH_QWERTY)}))
        result = runner.invoke(main, ["pass"], input="qwerty\n")
        assert result.exit_code == 1
        assert "found in known data breaches" in result.output
        assert str(server.requests[0].url).endswith("/range/B1B37")

    def test_not_breached_json(self, runner, use_server):
        use_server(FakeHIBP({"/range/": (200, RANGE_WITHOUT_QWERTY)}))
        result = runner.invoke(main, ["pass", "--json"], input="qwerty\n")
        assert result.exit_code == 0
        data = parse_json(result.output)
        assert data["kind"] == "password"
        assert data["breached"] is False
        assert data["target"] == "***OMITTED***"

    def test_never_prints_secret(self, runner, use_server):
        use_server(FakeHIBP({"/range/": (200, RANGE_WITH_QWERTY)}))
        result = runner.invoke(main, ["pass", "--json"], input="qwerty\n")
        assert "qwerty" not in result.output
        assert "B1B3773A05C0ED0176787A4F1574FF0075F7521E" not in result.output

    def test_network_error(self, runner, use_server):
        use_server(FakeHIBP(fail=True))
        result = runner.invoke(main, ["pass"], input="qwerty\n")
        assert result.exit_code == 1
        assert "Failed to send request to HIBP" in result.output


class TestRegisterCommand:

    def test_saves_key(self, runner, tmp_path):
        config_path = tmp_path / "checkpwn.conf"
        result = runner.invoke(main, ["--config", str(config_path), "register", "new-key"])
        assert result.exit_code == 0
        assert CheckpwnConfig.from_file(config_path).api_key == "new-key"

    def test_saved_key_used_by_acc(self, runner, use_server, tmp_path):
        server = use_server(FakeHIBP())
        runner.invoke(main, ["register", "stored-key"])
        result = runner.invoke(main, ["acc", "nobody@example.com"])
        assert result.exit_code == 0
        assert server.requests[0].headers["hibp-api-key"] == "stored-key"


class TestReadAccounts:

    def test_single_account(self):
        assert read_accounts("user@example.com") == ["user@example.com"]

    def test_file(self, tmp_path):
        path = tmp_path / "accounts"
        path.write_text("  a@example.com  \n#b@example.com\nusername\n")
        assert read_accounts(str(path)) == ["a@example.com", "username"]


def test_version(runner):
    result = runner.invoke(main, ["--version"])
    assert result.exit_code == 0
    assert "checkpwn" in result.output
