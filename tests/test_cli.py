from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from cukejunit.cli.junit_xml import app

DATA = Path(__file__).parent / "data"
SOURCE = DATA / "minimal.feature.ndjson"
EXPECTED = (DATA / "minimal.feature.xml").read_text(encoding="utf-8")

runner = CliRunner()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "CUKEJUNIT_SUITE_NAME",
        "CUKEJUNIT_TEST_CLASS_NAME",
        "CUKEJUNIT_NAMING_STRATEGY",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)


def test_writes_report_to_stdout() -> None:
    result = runner.invoke(app, [str(SOURCE)])
    assert result.exit_code == 0, result.output
    assert result.stdout == EXPECTED


def test_reads_from_stdin() -> None:
    result = runner.invoke(app, ["-"], input=SOURCE.read_text(encoding="utf-8"))
    assert result.exit_code == 0, result.output
    assert result.stdout == EXPECTED


def test_writes_report_to_file(tmp_path: Path) -> None:
    target = tmp_path / "reports" / "junit.xml"
    result = runner.invoke(app, [str(SOURCE), "--output", str(target)])
    assert result.exit_code == 0, result.output
    assert target.read_text(encoding="utf-8") == EXPECTED


def test_directory_output_derives_unique_file_names(tmp_path: Path) -> None:
    for _ in range(3):
        result = runner.invoke(app, [str(SOURCE), "-o", str(tmp_path)])
        assert result.exit_code == 0, result.output

    names = sorted(path.name for path in tmp_path.glob("*.xml"))
    assert names == [
        "minimal.feature.1.xml",
        "minimal.feature.2.xml",
        "minimal.feature.xml",
    ]
    assert (tmp_path / "minimal.feature.2.xml").read_text(encoding="utf-8") == EXPECTED


def test_naming_flags_override_defaults() -> None:
    result = runner.invoke(
        app,
        [
            str(SOURCE),
            "--suite-name",
            "Acceptance",
            "--feature-name",
            "include",
            "--test-class-name",
            "acceptance.Minimal",
        ],
    )
    assert result.exit_code == 0, result.output
    assert 'name="Acceptance"' in result.stdout
    assert 'classname="acceptance.Minimal" name="minimal - cukes"' in result.stdout


def test_naming_strategy_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CUKEJUNIT_NAMING_STRATEGY", "long,include")
    result = runner.invoke(app, [str(SOURCE)])
    assert result.exit_code == 0, result.output
    assert 'name="minimal - cukes"' in result.stdout


def test_stdin_cannot_be_written_to_a_directory(tmp_path: Path) -> None:
    result = runner.invoke(app, ["-", "-o", str(tmp_path)], input="")
    assert result.exit_code == 2
    assert list(tmp_path.iterdir()) == []


def test_missing_source_is_a_usage_error(tmp_path: Path) -> None:
    result = runner.invoke(app, [str(tmp_path / "absent.ndjson")])
    assert result.exit_code == 2


def test_incomplete_stream_fails_without_writing(tmp_path: Path) -> None:
    lines = SOURCE.read_text(encoding="utf-8").splitlines(keepends=True)
    truncated = tmp_path / "truncated.ndjson"
    truncated.write_text("".join(lines[:-1]), encoding="utf-8")
    target = tmp_path / "out.xml"

    result = runner.invoke(app, [str(truncated), "-o", str(target)])
    assert result.exit_code == 1
    assert not target.exists()


def test_malformed_stream_fails(tmp_path: Path) -> None:
    broken = tmp_path / "broken.ndjson"
    broken.write_text('{"testRunStarted": \n', encoding="utf-8")
    result = runner.invoke(app, [str(broken)])
    assert result.exit_code == 1
    assert "<testsuite" not in result.stdout


def test_source_with_invalid_utf8_fails_with_message(tmp_path: Path) -> None:
    broken = tmp_path / "binary.ndjson"
    broken.write_bytes(b'\xff\xfe{"testRunStarted": {}}\n')
    target = tmp_path / "out.xml"

    result = runner.invoke(app, [str(broken), "-o", str(target)])
    assert result.exit_code == 1
    assert not isinstance(result.exception, UnicodeDecodeError)
    assert not target.exists()
