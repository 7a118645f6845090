import asyncio
import json
import logging
import sys

import aiohttp.web
import pytest
from aiohttp.test_utils import TestClient, TestServer

from composite_demo import example
from composite_demo.__main__ import main
from composite_demo.logger import JsonFormatter
from dom import TreeTooDeepError


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    for name in ("COMPOSITE_TITLE", "COMPOSITE_MAX_DEPTH", "COMPOSITE_HOST", "COMPOSITE_PORT"):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("composite_demo.__main__.load_dotenv", lambda: False)


@pytest.mark.ci
def test_main_writes_to_stdout(capsys):
    assert main([]) == 0
    assert capsys.readouterr().out == example.build().html + "\n"


@pytest.mark.ci
def test_main_writes_output_file(tmp_path, capsys):
    target = tmp_path / "index.html"

    assert main(["--output", str(target), "--title", "Hello"]) == 0

    assert target.read_text(encoding="utf-8") == example.build("Hello").html + "\n"
    assert capsys.readouterr().out == ""


@pytest.mark.ci
def test_main_reads_title_from_environment(monkeypatch, capsys):
    monkeypatch.setenv("COMPOSITE_TITLE", "From env")

    assert main([]) == 0
    assert "      From env\n" in capsys.readouterr().out


@pytest.mark.ci
def test_main_reports_depth_failure(capsys):
    assert main(["--max-depth", "1"]) == 1

    captured = capsys.readouterr()
    assert captured.out == ""

    record = json.loads(captured.err.strip().splitlines()[-1])
    assert record["message"] == "Unable to render document"
    assert record["exc_info"]["type"] == "TreeTooDeepError"
    assert record["exc_info"]["limit"] == 1


@pytest.mark.ci
def test_main_removes_its_log_handlers():
    before = list(logging.getLogger("composite_demo").handlers)
    main(["--output", "/dev/null"])
    assert logging.getLogger("composite_demo").handlers == before


@pytest.mark.ci
def test_formatter_adds_error_fields():
    try:
        raise TreeTooDeepError(5, 3)
    except TreeTooDeepError:
        record = logging.LogRecord("dom", logging.ERROR, __file__, 1, "failed", None, sys.exc_info())

    payload = json.loads(JsonFormatter().format(record))

    assert payload["exc_info"]["type"] == "TreeTooDeepError"
    assert payload["exc_info"]["depth"] == 5
    assert payload["exc_info"]["limit"] == 3
    assert payload["exc_info"]["cause"] is None
    assert payload["exc_info"]["traceback"][0]["method"] == "test_formatter_adds_error_fields"


@pytest.fixture
def served(monkeypatch):
    apps = []

    def run_app(app, **kwargs):
        apps.append((app, kwargs))

    monkeypatch.setattr(aiohttp.web, "run_app", run_app)
    return apps


def _get(app):
    async def run():
        async with TestClient(TestServer(app)) as client:
            response = await client.get("/")
            return response.status, await response.text()

    return asyncio.run(run())


@pytest.mark.ci
def test_main_serves_document(served):
    assert main(["--serve", "--host", "0.0.0.0", "--port", "8080", "--title", "Served"]) == 0

    [(app, kwargs)] = served
    assert kwargs["host"] == "0.0.0.0"
    assert kwargs["port"] == 8080

    status, text = _get(app)
    assert status == 200
    assert text == example.build("Served").html


@pytest.mark.ci
def test_main_serve_reports_depth_failure(served, capsys):
    assert main(["--serve", "--max-depth", "1"]) == 1
    assert served == []

    record = json.loads(capsys.readouterr().err.strip().splitlines()[-1])
    assert record["exc_info"]["type"] == "TreeTooDeepError"


@pytest.mark.ci
def test_main_serve_uses_max_depth(served, monkeypatch):
    monkeypatch.setenv("COMPOSITE_MAX_DEPTH", "4")

    assert main(["--serve"]) == 0

    [(app, _)] = served
    assert _get(app)[0] == 200


@pytest.mark.ci
def test_main_local_logs_indented_json(tmp_path, capsys):
    target = tmp_path / "index.html"

    assert main(["--local", "--output", str(target)]) == 0

    err = capsys.readouterr().err
    assert '\n  "message": "Wrote document"' in err
    assert json.loads(err)["path"] == str(target)


@pytest.mark.ci
@pytest.mark.parametrize("name", ["COMPOSITE_MAX_DEPTH", "COMPOSITE_PORT"])
def test_main_rejects_non_numeric_environment(monkeypatch, capsys, name):
    monkeypatch.setenv(name, "lots")

    with pytest.raises(SystemExit) as info:
        main([])

    assert info.value.code == 2
    assert "invalid int value: 'lots'" in capsys.readouterr().err


@pytest.mark.ci
def test_main_restores_logger_levels():
    loggers = [logging.getLogger(name) for name in ("composite_demo", "dom")]
    for log in loggers:
        log.setLevel(logging.WARNING)

    try:
        main(["--output", "/dev/null"])
        assert [log.level for log in loggers] == [logging.WARNING, logging.WARNING]
    finally:
        for log in loggers:
            log.setLevel(logging.NOTSET)
