import json

import httpx

from wififinder.cli import main


def test_cli_offline_json_output(capsys):
    code = main(["venues", "--lat", "40.0", "--lon", "-73.0", "--radius", "6000", "--offline", "--json"])

    assert code == 0
    data = json.loads(capsys.readouterr().out)
    assert data["count"] == 8
    assert [v["distance_m"] for v in data["venues"]] == sorted(v["distance_m"] for v in data["venues"])


def test_cli_human_output_excludes_categories(capsys, monkeypatch):
    def fake_post_form(*_args, **_kwargs):
        raise httpx.ConnectError("offline")

    monkeypatch.setattr("wififinder.ingestion.overpass_client.post_form", fake_post_form)

    code = main(["venues", "--lat", "40.0", "--lon", "-73.0", "--exclude", "library"])

    assert code == 0
    out = capsys.readouterr().out
    assert out.startswith("3 venues within 1.0km:")
    assert "City Public Library" not in out
    assert "WorkSpace Co-op [coworking]  203m (2 min walk)  open 24/7" in out
    assert "wifi: Free WiFi -65 dBm [##..]" in out


def test_cli_rejects_zero_coordinates(capsys):
    code = main(["venues", "--lat", "0", "--lon", "0", "--offline", "--json"])

    assert code == 2
    captured = capsys.readouterr()
    assert "Invalid coordinates" in captured.err
    assert captured.out == ""
