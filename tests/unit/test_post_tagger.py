"""
Tests for output detection and container tagging
"""

from unittest.mock import patch

import pytest

from ytdlp_prompt.download.models import VideoInfo
from ytdlp_prompt.tagging.post_tagger import (
    OutputState,
    build_atomicparsley_command,
    build_mkvpropedit_command,
    detect_output,
    parse_upload_date,
    tag_output,
)
from ytdlp_prompt.utils.error_handler import ErrorCategory, Outcome
from ytdlp_prompt.utils.shell import CommandResult

INFO = VideoInfo(title="Episode 1", upload_date="20230115", extractor="youtube")


@pytest.fixture
def base(temp_dir):
    return str(temp_dir / "Episode_1")


def ok_run(cmd, cwd=None, echo=None):
    return Outcome.success(CommandResult(cmd, 0, "", ""))


class TestParseUploadDate:
    """Test the YYYYMMDD split"""

    def test_valid_date(self):
        assert parse_upload_date("20230115") == ("2023", "01", "15")

    def test_only_first_eight_digits_count(self):
        assert parse_upload_date("20230115123000") == ("2023", "01", "15")

    @pytest.mark.parametrize("value", [None, "", "2023-01-15", "2023011", "abcd0115"])
    def test_absent_or_malformed_gives_empty_parts(self, value):
        assert parse_upload_date(value) == ("", "", "")


class TestBuildCommands:
    """Test the tagging argument lists"""

    def test_atomicparsley_command(self):
        cmd = build_atomicparsley_command("AtomicParsley", "/out/Episode_1.mp4", "Episode 1 - Pilot", INFO)
        assert cmd == [
            "AtomicParsley",
            "/out/Episode_1.mp4",
            "--overWrite",
            "--title", "Episode 1 - Pilot",
            "--TVNetwork", "youtube",
            "--year", "2023-01-15",
        ]

    def test_atomicparsley_without_date_or_extractor(self):
        cmd = build_atomicparsley_command("atomicparsley", "x.mp4", "t", VideoInfo())
        assert cmd[cmd.index("--year") + 1] == "--"
        assert cmd[cmd.index("--TVNetwork") + 1] == ""

    def test_mkvpropedit_command(self):
        cmd = build_mkvpropedit_command("mkvpropedit", "/out/Episode_1.mkv", "It's: a title")
        assert cmd == ["mkvpropedit", "/out/Episode_1.mkv", "--edit", "info", "--set", "title=It's: a title"]


class TestDetectOutput:
    """Test the first-match container lookup"""

    def test_mp4(self, base):
        open(f"{base}.mp4", "wb").close()
        assert detect_output(base) == (OutputState.MP4_FOUND, f"{base}.mp4")

    def test_mkv(self, base):
        open(f"{base}.mkv", "wb").close()
        assert detect_output(base) == (OutputState.MKV_FOUND, f"{base}.mkv")

    def test_mp4_wins_when_both_exist(self, base):
        open(f"{base}.mp4", "wb").close()
        open(f"{base}.mkv", "wb").close()
        assert detect_output(base)[0] == OutputState.MP4_FOUND

    def test_other_containers_are_not_found(self, base):
        open(f"{base}.webm", "wb").close()
        assert detect_output(base) == (OutputState.NOT_FOUND, None)


class TestTagOutput:
    """Test the tagging state machine"""

    @patch("ytdlp_prompt.tagging.post_tagger.run_command", side_effect=ok_run)
    @patch("ytdlp_prompt.tagging.post_tagger.verify_atomicparsley",
           return_value=Outcome.success("/usr/bin/AtomicParsley"))
    def test_mp4_runs_atomicparsley(self, mock_verify, mock_run, base):
        open(f"{base}.mp4", "wb").close()
        seen = []
        outcome = tag_output(base, "Episode 1", INFO, on_command=seen.append)

        assert outcome.ok
        assert outcome.value == f"{base}.mp4"
        cmd = mock_run.call_args.args[0]
        assert cmd[:3] == ["/usr/bin/AtomicParsley", f"{base}.mp4", "--overWrite"]
        assert cmd[-2:] == ["--year", "2023-01-15"]
        assert seen == [cmd]

    @patch("ytdlp_prompt.tagging.post_tagger.run_command", side_effect=ok_run)
    @patch("ytdlp_prompt.tagging.post_tagger.verify_mkvpropedit",
           return_value=Outcome.success("/usr/bin/mkvpropedit"))
    @patch("ytdlp_prompt.tagging.post_tagger.verify_atomicparsley")
    def test_mkv_runs_mkvpropedit(self, mock_atomic, mock_verify, mock_run, base):
        open(f"{base}.mkv", "wb").close()
        outcome = tag_output(base, "Episode 1", INFO)

        assert outcome.ok
        assert mock_run.call_args.args[0] == [
            "/usr/bin/mkvpropedit", f"{base}.mkv", "--edit", "info", "--set", "title=Episode 1",
        ]
        mock_atomic.assert_not_called()

    @patch("ytdlp_prompt.tagging.post_tagger.run_command")
    @patch("ytdlp_prompt.tagging.post_tagger.verify_mkvpropedit")
    @patch("ytdlp_prompt.tagging.post_tagger.verify_atomicparsley")
    def test_no_output_runs_nothing(self, mock_atomic, mock_mkv, mock_run, base):
        """A reported-successful download without a file is still a failure"""
        outcome = tag_output(base, "Episode 1", INFO)

        assert not outcome.ok
        assert outcome.error.category == ErrorCategory.NO_OUTPUT
        assert outcome.error.message == "Failed to download the video."
        mock_atomic.assert_not_called()
        mock_mkv.assert_not_called()
        mock_run.assert_not_called()

    @patch("ytdlp_prompt.tagging.post_tagger.run_command")
    @patch("ytdlp_prompt.tagging.post_tagger.verify_atomicparsley")
    def test_missing_tagger(self, mock_verify, mock_run, base):
        open(f"{base}.mp4", "wb").close()
        mock_verify.return_value = Outcome.failure(
            ErrorCategory.MISSING_DEPENDENCY, "AtomicParsley not found.", hint="install it",
        )
        outcome = tag_output(base, "Episode 1", INFO)

        assert outcome.error.category == ErrorCategory.MISSING_DEPENDENCY
        mock_run.assert_not_called()

    @patch("ytdlp_prompt.tagging.post_tagger.run_command")
    @patch("ytdlp_prompt.tagging.post_tagger.verify_mkvpropedit",
           return_value=Outcome.success("mkvpropedit"))
    def test_tagging_failure_keeps_the_file(self, mock_verify, mock_run, base):
        open(f"{base}.mkv", "wb").close()
        mock_run.return_value = Outcome.failure(ErrorCategory.SUBPROCESS, "x", returncode=2, stderr="Error")
        outcome = tag_output(base, "Episode 1", INFO)

        assert not outcome.ok
        assert outcome.error.message == "Failed to tag the video."
        assert outcome.error.returncode == 2
        assert detect_output(base)[0] == OutputState.MKV_FOUND
