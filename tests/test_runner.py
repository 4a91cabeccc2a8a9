import logging

import pytest

from gitreminder.git.runner import CommandError, CommandResult, run_command


@pytest.mark.asyncio
async def test_run_command_returns_trimmed_stdout(tmp_path):
    res = await run_command("printf '  hello\\n\\n'", str(tmp_path))
    assert res == CommandResult.success("hello")


@pytest.mark.asyncio
async def test_run_command_runs_in_cwd(tmp_path):
    res = await run_command("pwd", str(tmp_path))
    assert res.ok
    assert res.output.endswith(tmp_path.name)


@pytest.mark.asyncio
async def test_non_zero_exit_is_failure_and_logged(tmp_path, caplog):
    with caplog.at_level(logging.INFO, logger="gitreminder.git.runner"):
        res = await run_command("echo nope >&2; exit 3", str(tmp_path))

    assert not res.ok
    assert isinstance(res.error, CommandError)
    assert res.error.returncode == 3
    assert res.message == "nope"
    assert "exit 3" in caplog.text


@pytest.mark.asyncio
async def test_spawn_failure_is_failure(tmp_path):
    res = await run_command("true", str(tmp_path / "missing"))
    assert not res.ok
    assert res.error.returncode is None
