"""Tests for the Git tag operations."""

import unittest
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import Mock, patch

from pkgtag.reporter import VerboseReporter
from pkgtag.vcs.git_client import GitClient, GitError


class DummyProc(SimpleNamespace):
    returncode: int = 0
    stdout: str = ""
    stderr: str = ""


class TestGitTags(unittest.TestCase):
    def _client_with_output(self, stdout):
        calls = []

        def fake_run(self, args, check=True):
            calls.append(args)
            return DummyProc(returncode=0, stdout=stdout, stderr="")

        patcher = patch.object(GitClient, "_run", autospec=True)
        mock_run = patcher.start()
        self.addCleanup(patcher.stop)
        mock_run.side_effect = fake_run
        return GitClient(Path("/repo")), calls

    def test_tag_exists_true(self) -> None:
        client, calls = self._client_with_output("v1.0.0\n")
        self.assertTrue(client.tag_exists("v1.0.0"))
        self.assertEqual(calls, [["tag", "-l", "v1.0.0"]])

    def test_tag_exists_false_on_empty_output(self) -> None:
        client, _ = self._client_with_output("")
        self.assertFalse(client.tag_exists("v1.0.0"))

    def test_tag_exists_requires_exact_line(self) -> None:
        client, _ = self._client_with_output("v1.0.0-beta\nv1.0.00\n")
        self.assertFalse(client.tag_exists("v1.0.0"))

    def test_tag_exists_handles_crlf(self) -> None:
        client, _ = self._client_with_output("v0.9.0\r\nv1.0.0\r\n")
        self.assertTrue(client.tag_exists("v1.0.0"))

    def test_is_head_tag(self) -> None:
        client, calls = self._client_with_output("v1.0.0\n")
        self.assertTrue(client.is_head_tag("v1.0.0"))
        self.assertEqual(calls, [["tag", "-l", "v1.0.0", "--points-at", "HEAD"]])

    def test_set_tag_runs_lightweight_tag(self) -> None:
        client, calls = self._client_with_output("")
        client.set_tag("v1.0.0")
        self.assertEqual(calls, [["tag", "v1.0.0"]])

    def test_set_tag_reports_command(self) -> None:
        client, calls = self._client_with_output("")
        echo = Mock()
        reporter = VerboseReporter(True, echo=echo)
        client.set_tag("v1.0.0", reporter=reporter)
        echo.assert_called_once_with("\n> git tag v1.0.0", err=True)
        self.assertEqual(calls, [["tag", "v1.0.0"]])

    def test_set_tag_dry_run_does_not_execute(self) -> None:
        client, calls = self._client_with_output("")
        echo = Mock()
        reporter = VerboseReporter(True, echo=echo)
        client.set_tag("v1.0.0", reporter=reporter, dry_run=True)
        self.assertEqual(calls, [])
        echo.assert_called_once_with("\n> git tag v1.0.0", err=True)

    def test_push(self) -> None:
        client, calls = self._client_with_output("")
        echo = Mock()
        reporter = VerboseReporter(True, echo=echo)
        client.push("v1.0.0", reporter=reporter)
        self.assertEqual(calls, [["push", "origin", "v1.0.0"]])
        echo.assert_called_once_with("\n> git push origin v1.0.0", err=True)

    def test_push_to_other_remote_dry_run(self) -> None:
        client, calls = self._client_with_output("")
        client.push("v1.0.0", remote="upstream", dry_run=True)
        self.assertEqual(calls, [])


class TestBuildTagCommand(unittest.TestCase):
    def test_lightweight(self) -> None:
        self.assertEqual(GitClient.build_tag_command("v1").args, ["tag", "v1"])

    def test_annotated(self) -> None:
        cmd = GitClient.build_tag_command("v1", message="Release v1")
        self.assertEqual(cmd.args, ["tag", "v1", "-m", "Release v1"])
        self.assertEqual(cmd.text, "git tag v1 -m 'Release v1'")

    def test_signed_without_message_uses_empty_message(self) -> None:
        cmd = GitClient.build_tag_command("v1", sign=True)
        self.assertEqual(cmd.argv, ["git", "tag", "v1", "-sm", ""])

    def test_empty_message_still_annotates(self) -> None:
        self.assertEqual(GitClient.build_tag_command("v1", message="").args, ["tag", "v1", "-m", ""])


class TestGitRun(unittest.TestCase):
    @patch("pkgtag.vcs.git_client.subprocess.run")
    def test_failure_raises_git_error_with_first_line(self, mock_run):
        mock_run.return_value = Mock(
            returncode=128,
            stdout="",
            stderr="fatal: tag 'v1.0.0' already exists\nhint: something\n",
        )
        client = GitClient(Path("/fake/repo"))
        with self.assertRaises(GitError) as cm:
            client.set_tag("v1.0.0")
        self.assertEqual(str(cm.exception), "git tag v1.0.0: fatal: tag 'v1.0.0' already exists")
        self.assertEqual(mock_run.call_args.kwargs["cwd"], Path("/fake/repo"))

    @patch("pkgtag.vcs.git_client.subprocess.run")
    def test_missing_git_raises_git_error(self, mock_run):
        mock_run.side_effect = FileNotFoundError(2, "No such file or directory: 'git'")
        with self.assertRaises(GitError):
            GitClient(Path("/fake/repo")).tag_exists("v1.0.0")

    @patch("pkgtag.vcs.git_client.subprocess.run")
    def test_tag_list_failure_propagates(self, mock_run):
        mock_run.return_value = Mock(returncode=128, stdout="", stderr="fatal: not a git repository")
        with self.assertRaises(GitError):
            GitClient(Path("/fake/repo")).tag_exists("v1.0.0")


if __name__ == "__main__":
    unittest.main()
