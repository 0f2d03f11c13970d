import json
import subprocess
import unittest
from pathlib import Path
from unittest.mock import patch

from remotepatch.errors import WorkspaceNotFoundError
from remotepatch.locator import CargoWorkspaceLocator


def _completed(returncode: int, stdout: str = "", stderr: str = ""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestCargoWorkspaceLocator(unittest.TestCase):
    def test_cargo_binary_from_env(self) -> None:
        self.assertEqual(CargoWorkspaceLocator(environ={"CARGO": "/opt/cargo"}).cargo, "/opt/cargo")
        self.assertEqual(CargoWorkspaceLocator(environ={}).cargo, "cargo")
        self.assertEqual(CargoWorkspaceLocator("my-cargo", environ={"CARGO": "x"}).cargo, "my-cargo")

    @patch("remotepatch.locator.cargo.subprocess.run")
    def test_locate_returns_workspace_folder(self, run) -> None:
        run.return_value = _completed(0, json.dumps({"root": "/ws/a/Cargo.toml"}))
        locator = CargoWorkspaceLocator(environ={})

        root = locator(Path("/ws/a/src/crate"))

        self.assertEqual(root, Path("/ws/a"))
        args = run.call_args.args[0]
        self.assertEqual(args[:3], ["cargo", "locate-project", "--workspace"])
        self.assertEqual(args[-2:], ["--manifest-path", str(Path("/ws/a/src/crate/Cargo.toml"))])

    @patch("remotepatch.locator.cargo.subprocess.run")
    def test_nonzero_exit_raises(self, run) -> None:
        run.return_value = _completed(101, stderr="error: manifest path does not exist\n")
        with self.assertRaises(WorkspaceNotFoundError) as ctx:
            CargoWorkspaceLocator(environ={}).locate(Path("/nope"))
        self.assertEqual(ctx.exception.details["returncode"], 101)
        self.assertEqual(ctx.exception.details["path"], str(Path("/nope")))
        self.assertIn("does not exist", ctx.exception.details["stderr"])

    @patch("remotepatch.locator.cargo.subprocess.run")
    def test_invalid_output_raises(self, run) -> None:
        run.return_value = _completed(0, "not json")
        with self.assertRaises(WorkspaceNotFoundError):
            CargoWorkspaceLocator(environ={}).locate(Path("/ws"))

        run.return_value = _completed(0, json.dumps({"other": 1}))
        with self.assertRaises(WorkspaceNotFoundError):
            CargoWorkspaceLocator(environ={}).locate(Path("/ws"))

    @patch("remotepatch.locator.cargo.subprocess.run", side_effect=FileNotFoundError("cargo"))
    def test_missing_cargo_raises(self, run) -> None:
        with self.assertRaises(WorkspaceNotFoundError) as ctx:
            CargoWorkspaceLocator(environ={}).locate(Path("/ws"))
        self.assertIsInstance(ctx.exception.cause, FileNotFoundError)


if __name__ == "__main__":
    unittest.main()
