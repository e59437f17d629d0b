import json
from unittest.mock import MagicMock, patch

import httpx
import pytest

from rawtweet.cli import main


@pytest.fixture
def credentials_env(monkeypatch):
    monkeypatch.setenv("TWITTER_CK", "ck")
    monkeypatch.setenv("TWITTER_CS", "cs")
    monkeypatch.setenv("TWITTER_AT", "at")
    monkeypatch.setenv("TWITTER_ATS", "ats")
    for name in ("TWITTER_API_BASE_URL", "TWITTER_TIMEOUT_SECONDS", "TWITTER_SIGNING_KEY_MODE"):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


@pytest.fixture
def template_file(tmp_path):
    path = tmp_path / "timeline.json"
    path.write_text(
        json.dumps(
            {
                "endpoint": "statuses/user_timeline.json",
                "method": "GET",
                "parameters": {"screen_name": "twitterapi", "count": 2},
            }
        ),
        encoding="utf-8",
    )
    return path


def _client(status_code=200, text='[{"id":1}]'):
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    client_instance = MagicMock(spec=httpx.Client)
    client_instance.request.return_value = response
    return client_instance


def _argv(tmp_path, *args):
    return [*args, "--env-file", str(tmp_path / "absent.env")]


def test_prints_body_and_exits_zero(credentials_env, template_file, tmp_path, capsys):
    client_instance = _client()

    with patch("httpx.Client", return_value=client_instance):
        code = main(_argv(tmp_path, str(template_file), "-p", "count=5", "--param", "lang=ja"))

    assert code == 0
    assert capsys.readouterr().out == '[{"id":1}]\n'
    method, url = client_instance.request.call_args.args
    assert method == "GET"
    assert url == (
        "https://api.twitter.com/1.1/statuses/user_timeline.json"
        "?count=5&lang=ja&screen_name=twitterapi"
    )


def test_non_2xx_body_is_printed_and_exits_zero(credentials_env, template_file, tmp_path, capsys):
    with patch("httpx.Client", return_value=_client(401, '{"errors":[]}')):
        code = main(_argv(tmp_path, str(template_file)))

    assert code == 0
    assert capsys.readouterr().out == '{"errors":[]}\n'


def test_malformed_override_does_not_abort(credentials_env, template_file, tmp_path, capsys):
    with patch("httpx.Client", return_value=_client()):
        code = main(_argv(tmp_path, str(template_file), "-p", "novalue"))

    assert code == 0
    assert "Invalid parameter override" in capsys.readouterr().err


def test_missing_credentials_fail_before_network(credentials_env, template_file, tmp_path, capsys):
    credentials_env.delenv("TWITTER_ATS")

    with patch("httpx.Client") as client_ctor:
        code = main(_argv(tmp_path, str(template_file)))

    assert code == 1
    client_ctor.assert_not_called()
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "TWITTER_ATS" in captured.err


def test_missing_template_file_exits_one(credentials_env, tmp_path, capsys):
    with patch("httpx.Client") as client_ctor:
        code = main(_argv(tmp_path, str(tmp_path / "nope.json")))

    assert code == 1
    client_ctor.assert_not_called()
    assert "not found" in capsys.readouterr().err


def test_unsupported_value_sends_nothing(credentials_env, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text('{"endpoint": "x.json", "method": "GET", "parameters": {"ids": [1, 2]}}', encoding="utf-8")

    with patch("httpx.Client") as client_ctor:
        code = main(_argv(tmp_path, str(path)))

    assert code == 1
    client_ctor.assert_not_called()


def test_network_error_exits_one(credentials_env, template_file, tmp_path, capsys):
    client_instance = _client()
    client_instance.request.side_effect = httpx.ConnectTimeout("timed out")

    with patch("httpx.Client", return_value=client_instance):
        code = main(_argv(tmp_path, str(template_file)))

    assert code == 1
    captured = capsys.readouterr()
    assert captured.out == ""
    assert "timed out" in captured.err


def test_missing_template_argument_is_a_usage_error(capsys):
    with pytest.raises(SystemExit) as exc:
        main([])
    assert exc.value.code == 2


def test_verbose_logs_oauth_parameters(credentials_env, template_file, tmp_path, capsys):
    with patch("httpx.Client", return_value=_client()):
        code = main(_argv(tmp_path, str(template_file), "-v"))

    assert code == 0
    err = capsys.readouterr().err
    assert "oauth_nonce" in err
    assert "Signature base string" in err
    assert "Access Token Secret: ***\n" in err
    assert "Consumer Secret: **\n" in err


def test_non_utf8_template_value_exits_one(credentials_env, tmp_path, capsys):
    path = tmp_path / "surrogate.json"
    path.write_text('{"endpoint": "x.json", "method": "GET", "parameters": {"q": "\\udcff"}}', encoding="utf-8")

    with patch("httpx.Client") as client_ctor:
        code = main(_argv(tmp_path, str(path)))

    assert code == 1
    client_ctor.assert_not_called()
    assert "UTF-8" in capsys.readouterr().err


def test_non_utf8_override_is_skipped(credentials_env, template_file, tmp_path, capsys):
    client_instance = _client()

    with patch("httpx.Client", return_value=client_instance):
        code = main(_argv(tmp_path, str(template_file), "-p", "q=\udcff", "-p", "count=5"))

    assert code == 0
    _, url = client_instance.request.call_args.args
    assert url.endswith("?count=5&screen_name=twitterapi")
    assert "Invalid parameter override" in capsys.readouterr().err
