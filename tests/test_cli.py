from __future__ import annotations

import json
import os
import subprocess
import sys
import textwrap
from pathlib import Path

ROOT_DIR = Path(__file__).resolve().parents[1]

SCHEMA_MODULE = textwrap.dedent(
    """
    from config_loadr import ConfigSchema, U16, default_field, required_field

    SCHEMA = ConfigSchema(
        "AppConfig",
        [
            default_field("CLI_PORT", U16, "Server port", default=8080),
            required_field("CLI_SECRET", str, "Signing secret", example="x"),
        ],
    )
    NOT_A_SCHEMA = 42
    """
)


def _run_cli(
    tmp_path: Path, *args: str, env: dict[str, str] | None = None
) -> subprocess.CompletedProcess[str]:
    (tmp_path / "cli_schema.py").write_text(SCHEMA_MODULE, encoding="utf-8")
    run_env = {
        key: value for key, value in os.environ.items() if not key.startswith("CLI_")
    }
    run_env["PYTHONPATH"] = os.pathsep.join([str(tmp_path), str(ROOT_DIR)])
    run_env.update(env or {})
    cmd = [sys.executable, "-m", "config_loadr.cli", "--schema", "cli_schema:SCHEMA", *args]
    return subprocess.run(cmd, check=False, capture_output=True, text=True, cwd=tmp_path, env=run_env)


def test_validate_success(tmp_path: Path) -> None:
    result = _run_cli(tmp_path, "--validate", env={"CLI_SECRET": "abc"})
    assert result.returncode == 0
    assert "Configuration OK" in result.stdout


def test_validate_failure_reports_every_error(tmp_path: Path) -> None:
    result = _run_cli(tmp_path, "--validate", env={"CLI_PORT": "not-a-number"})
    assert result.returncode == 1
    assert "Configuration failed with 2 error(s):" in result.stderr
    assert "CLI_PORT: Invalid value 'not-a-number'" in result.stderr
    assert "CLI_SECRET: Is missing from environment and is required" in result.stderr


def test_validate_reads_env_file(tmp_path: Path) -> None:
    env_file = tmp_path / "local.env"
    env_file.write_text("CLI_SECRET=from-file\n", encoding="utf-8")
    result = _run_cli(tmp_path, "--validate", "--env-file", str(env_file))
    assert result.returncode == 0


def test_write_docs(tmp_path: Path) -> None:
    target = tmp_path / "CONFIG.md"
    result = _run_cli(tmp_path, "--write-docs", str(target))
    assert result.returncode == 0
    content = target.read_text(encoding="utf-8")
    assert "### `CLI_SECRET`" in content
    assert "Example: `CLI_SECRET=x`" in content
    assert "Default: `8080`" in content


def test_print_docs_does_not_need_environment(tmp_path: Path) -> None:
    result = _run_cli(tmp_path, "--print-docs", "--title", "App")
    assert result.returncode == 0
    assert result.stdout.startswith("# App\n")


def test_metadata_json(tmp_path: Path) -> None:
    result = _run_cli(tmp_path, "--metadata")
    assert result.returncode == 0
    payload = json.loads(result.stdout)
    assert list(payload) == ["CLI_PORT", "CLI_SECRET"]
    assert payload["CLI_PORT"]["default_or_example"] == "8080"
    assert payload["CLI_SECRET"]["required"] is True


def test_bad_schema_reference(tmp_path: Path) -> None:
    (tmp_path / "cli_schema.py").write_text(SCHEMA_MODULE, encoding="utf-8")
    run_env = dict(os.environ)
    run_env["PYTHONPATH"] = os.pathsep.join([str(tmp_path), str(ROOT_DIR)])
    for reference in ("cli_schema:NOT_A_SCHEMA", "cli_schema:MISSING", "no_colon", "absent_module:X"):
        result = subprocess.run(
            [sys.executable, "-m", "config_loadr.cli", "--schema", reference, "--print-docs"],
            check=False,
            capture_output=True,
            text=True,
            cwd=tmp_path,
            env=run_env,
        )
        assert result.returncode == 1, reference
        assert result.stderr.startswith("error: "), reference
