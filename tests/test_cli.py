import contextlib
import io
import os
import tempfile
import unittest
from unittest.mock import patch

from remotepatch import cli
from remotepatch.errors import TransferError
from remotepatch.models import TransferResult


class TestCli(unittest.TestCase):
    def setUp(self) -> None:
        self._env = patch.dict(os.environ, {}, clear=False)
        self._env.start()
        os.environ.pop("REMOTEPATCH_BUILD_SERVER", None)
        os.environ.pop("REMOTEPATCH_BUILD_PATH", None)

    def tearDown(self) -> None:
        self._env.stop()

    def test_missing_build_server_exits_1(self) -> None:
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = cli.main(["--build-path", "x"])
        self.assertEqual(code, 1)
        self.assertIn("configure:", err.getvalue())

    def test_dry_run_without_patches(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            manifest = os.path.join(td, "Cargo.toml")
            with open(manifest, "w", encoding="utf-8") as f:
                f.write('[package]\nname = "x"\n')

            out = io.StringIO()
            with contextlib.redirect_stdout(out):
                code = cli.main(
                    ["--build-server", "b", "--build-path", "p", "--manifest-path", manifest, "--dry-run"]
                )

        self.assertEqual(code, 0)
        self.assertIn("No patches", out.getvalue())

    @patch("remotepatch.cli.RemotePatchManager.handle_patches")
    def test_transfer_error_exits_1(self, handle) -> None:
        handle.side_effect = TransferError("rsync failed with exit code 23")
        err = io.StringIO()
        with contextlib.redirect_stderr(err):
            code = cli.main(["--build-server", "b", "--build-path", "p"])
        self.assertEqual(code, 1)
        self.assertIn("transfer workspace: rsync failed", err.getvalue())

    @patch("remotepatch.cli.RemotePatchManager.handle_patches")
    def test_success_exits_0(self, handle) -> None:
        handle.return_value = TransferResult(status="skipped")
        os.environ["REMOTEPATCH_BUILD_SERVER"] = "b"
        os.environ["REMOTEPATCH_BUILD_PATH"] = "p"
        self.assertEqual(cli.main([]), 0)
        handle.assert_called_once()


if __name__ == "__main__":
    unittest.main()
