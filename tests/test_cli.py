import pytest
import responses

from tamboon.cipher import rot128
from tamboon.cli import main

TOKEN_URL = "https://vault.example.com/tokens"
CHARGE_URL = "https://api.example.com/charges"
CSV = (
    "Name,AmountSubunits,CCNumber,CVV,ExpMonth,ExpYear\n"
    "John Doe,5000,[card-number],123,12,2026\n"
    "Jane Smith,10000,[card-number],456,06,2026\n"
)


@pytest.fixture(autouse=True)
def _env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OMISE_PKEY", "placeholder")
    monkeypatch.setenv("OMISE_SKEY", "placeholder")
    monkeypatch.setenv("OMISE_TOKEN_URL", TOKEN_URL)
    monkeypatch.setenv("OMISE_CHARGE_URL", CHARGE_URL)
    for name in ("MAX_RECORDS", "EXP_YEAR_INCREASE", "MAX_RETRIES"):
        monkeypatch.setenv(name, "0")
        monkeypatch.delenv(name)


@pytest.fixture
def api():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.POST, TOKEN_URL, json={"object": "token", "id": "tokn_1"})
        rsps.add(responses.POST, CHARGE_URL, json={"object": "charge", "id": "chrg_1"})
        yield rsps


def _write(tmp_path, text):
    path = tmp_path / "test.rot128"
    path.write_bytes(rot128(text.encode()))
    return str(path)


def test_main_workflow(tmp_path, api, capsys):
    status = main([_write(tmp_path, CSV)])
    out = capsys.readouterr().out
    assert status == 0
    assert out.startswith("performing donations...\ndone.\n")
    assert "total received: THB     150.00" in out
    assert "successfully donated: THB     150.00" in out
    assert "top donors: Jane Smith" in out
    assert "John Doe" in out
    token_calls = [c for c in api.calls if c.request.url == TOKEN_URL]
    assert len(token_calls) == 2


def test_missing_args_prints_usage(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == "Usage: tamboon <inputfile.rot128>\n"


def test_invalid_file(capsys):
    assert main(["nonexistent.rot128"]) == 1
    assert capsys.readouterr().out == "performing donations...\n"


def test_dotenv_file_is_loaded(tmp_path, api, capsys):
    (tmp_path / ".env").write_text("MAX_RECORDS=1\n")
    assert main([_write(tmp_path, CSV)]) == 0
    out = capsys.readouterr().out
    assert "top donors: John Doe" in out
    assert "Jane Smith" not in out
    assert "total received: THB      50.00" in out