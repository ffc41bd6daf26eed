from __future__ import annotations

import contextlib
import io
import unittest
from pathlib import Path
from unittest.mock import AsyncMock, patch

from site_archiver import cli
from site_archiver.errors import DirectoryCreationError
from site_archiver.models import CrawlReport


class CliTest(unittest.TestCase):
    def test_defaults(self) -> None:
        args = cli.parse_args([])
        self.assertEqual(args.origin, "https://am.ndhu.edu.tw/")
        self.assertEqual(args.timeout, 30.0)
        self.assertFalse(args.headful)

    def test_unknown_timezone_is_a_usage_error(self) -> None:
        with patch.object(cli, "archive_site", AsyncMock()) as runner:
            for value in ("Mars/Olympus_Mons", "../etc", ""):
                with self.subTest(value=value):
                    with contextlib.redirect_stderr(io.StringIO()):
                        with self.assertRaises(SystemExit) as raised:
                            cli.main(["--timezone", value])
                    self.assertEqual(raised.exception.code, 2)
        runner.assert_not_called()

    def test_runs_archive_with_config(self) -> None:
        report = CrawlReport(visited=3, done=["a", "b"], failed=["c"], attachments=1)
        with patch.object(cli, "archive_site", AsyncMock(return_value=report)) as runner:
            status = cli.main(["--origin", "https://example.org/", "--output", "out", "--headful"])
        self.assertEqual(status, 0)
        config = runner.call_args.args[0]
        self.assertEqual(config.origin_url, "https://example.org/")
        self.assertEqual(config.origin_host, "example.org")
        self.assertEqual(config.archive_root, Path("out").resolve())
        self.assertFalse(config.headless)

    def test_startup_directory_failure_exits_non_zero(self) -> None:
        failing = AsyncMock(side_effect=DirectoryCreationError("read-only filesystem"))
        with patch.object(cli, "archive_site", failing):
            self.assertEqual(cli.main([]), 1)


if __name__ == "__main__":
    unittest.main()
