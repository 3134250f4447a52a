import httpx
from typer.testing import CliRunner

import tvrotate.fetcher as fetcher_module
from tvrotate.cli import app


def _configure(tmp_path, monkeypatch, upstream):
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        """
zone_id: zone123
token_config_id: cfg-456
source_url: https://idp.example.com/.well-known/jwks.json
"""
    )
    monkeypatch.setattr(fetcher_module, "build_client", upstream.client)
    return str(config_path)


def test_fetch_prints_envelope(tmp_path, monkeypatch, make_upstream):
    upstream = make_upstream(httpx.Response(200, json={"keys": [{"kid": "abc"}]}))
    config_path = _configure(tmp_path, monkeypatch, upstream)

    result = CliRunner().invoke(app, ["--config", config_path, "fetch"])
    assert result.exit_code == 0, result.stdout
    assert '{"keys":[{"kid":"abc"}]}' in result.stdout


def test_update_prints_api_response(tmp_path, monkeypatch, jwks, make_upstream):
    upstream = make_upstream(
        httpx.Response(200, json=jwks),
        api=httpx.Response(403, text='{"success":false}'),
    )
    config_path = _configure(tmp_path, monkeypatch, upstream)
    monkeypatch.setenv("CF_API_TOKEN", "cli-token")

    result = CliRunner().invoke(app, ["--config", config_path, "update"])
    assert result.exit_code == 0, result.stdout
    assert '{"success":false}' in result.stdout
    assert upstream.requests[-1].headers["Authorization"] == "Bearer cli-token"


def test_update_without_token_fails(tmp_path, monkeypatch, jwks, make_upstream):
    upstream = make_upstream(httpx.Response(200, json=jwks))
    config_path = _configure(tmp_path, monkeypatch, upstream)
    monkeypatch.delenv("CF_API_TOKEN", raising=False)

    result = CliRunner().invoke(app, ["--config", config_path, "update"])
    assert result.exit_code == 1
    assert "Update failed" in result.stdout
    assert upstream.requests == []


def test_schedule_runs_once_within_lifespan(
    tmp_path, monkeypatch, jwks, make_upstream
):
    upstream = make_upstream(httpx.Response(200, json=jwks))
    config_path = _configure(tmp_path, monkeypatch, upstream)
    monkeypatch.setenv("CF_API_TOKEN", "cli-token")

    result = CliRunner().invoke(
        app,
        ["--config", config_path, "schedule", "--interval", "60", "--lifespan", "0.1"],
    )
    assert result.exit_code == 0, result.stdout
    assert "Completed 1 scheduled runs" in result.stdout
    assert [r.method for r in upstream.requests] == ["GET", "PUT"]
