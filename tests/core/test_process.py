"""
Unit tests for external command execution.
"""

import pytest
from unittest.mock import Mock, patch

from xcsetup.core.exceptions import CommandError
from xcsetup.core.process import CommandResult, run_command


class TestRunCommand:
    @patch("subprocess.run")
    def test_streams_output_by_default(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout=None, stderr=None)

        result = run_command(["chmod", "+x", "installer.run"])

        mock_run.assert_called_once_with(
            ["chmod", "+x", "installer.run"],
            capture_output=False,
            text=True,
            check=False,
        )
        assert result == CommandResult(0, "", "")
        assert result.ok

    @patch("subprocess.run")
    def test_silent_captures_output(self, mock_run):
        mock_run.return_value = Mock(returncode=0, stdout="ii  libc6:i386", stderr="")

        result = run_command(["dpkg", "-l", "libc6:i386"], silent=True)

        assert mock_run.call_args.kwargs["capture_output"] is True
        assert result.stdout == "ii  libc6:i386"

    @patch("subprocess.run")
    def test_converts_paths_to_strings(self, mock_run, tmp_path):
        mock_run.return_value = Mock(returncode=0, stdout="", stderr="")

        run_command([tmp_path / "installer.run", "--prefix", tmp_path / "xc8"])

        assert mock_run.call_args.args[0] == [
            str(tmp_path / "installer.run"),
            "--prefix",
            str(tmp_path / "xc8"),
        ]

    @patch("subprocess.run")
    def test_nonzero_exit_raises(self, mock_run):
        mock_run.return_value = Mock(returncode=100, stdout="", stderr="")

        with pytest.raises(CommandError, match="failed with exit code 100") as exc_info:
            run_command(["apt-get", "install", "-y"])

        assert exc_info.value.exit_code == 100
        assert exc_info.value.command == ["apt-get", "install", "-y"]

    @patch("subprocess.run")
    def test_nonzero_exit_ignored(self, mock_run):
        mock_run.return_value = Mock(returncode=1, stdout="", stderr="not found")

        result = run_command(["dpkg", "-l", "x"], silent=True, ignore_return_code=True)

        assert result.exit_code == 1
        assert not result.ok
        assert result.stderr == "not found"

    @patch("subprocess.run")
    def test_missing_executable(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory")

        with pytest.raises(CommandError, match="Unable to run 'dpkg'"):
            run_command(["dpkg", "-l", "x"], ignore_return_code=True)

    def test_empty_command(self):
        with pytest.raises(ValueError):
            run_command([])

    def test_real_process(self):
        """Smoke test against a real subprocess."""
        result = run_command(
            ["sh", "-c", "echo hello; exit 3"], silent=True, ignore_return_code=True
        )

        assert result.exit_code == 3
        assert result.stdout.strip() == "hello"

    def test_real_process_failure(self):
        with pytest.raises(CommandError) as exc_info:
            run_command(["sh", "-c", "exit 2"], silent=True)

        assert exc_info.value.exit_code == 2
