import os
import tempfile
import unittest
from pathlib import Path

from remotepatch.config import RemoteBuildConfig
from remotepatch.errors import (
    InvalidArgumentError,
    ManifestParseError,
    ManifestReadError,
    Stage,
    TransferError,
    WorkspaceNotFoundError,
)
from remotepatch.manager import RemotePatchManager
from remotepatch.plan import TransferKind

MANIFEST = """[package]
name = "app"

[patch.a]
a-crate = { path = "/some/prefix/a/src/a-crate" }
a-other-crate = { path = "/some/prefix/a/src/subfolder/a-other-crate" }
[patch.b]
b-crate = { path = "/some/prefix/b/src/b-crate" }
git-crate = { git = "https://some-url/test/test" }
"""


def fake_locator(path: Path) -> Path:
    for root in ("/some/prefix/a", "/some/prefix/b"):
        if str(path).startswith(root):
            return Path(root)
    raise WorkspaceNotFoundError("Invalid Path")


class FakeCopier:
    def __init__(self) -> None:
        self.calls = []
        self.manifest_contents = []

    def sync_directory(self, local_dir, remote_dir) -> str:
        self.calls.append(("sync_directory", str(local_dir), str(remote_dir)))
        return f"builder:{remote_dir}"

    def copy_file(self, local_file, remote_file) -> str:
        self.calls.append(("copy_file", str(remote_file)))
        with open(local_file, encoding="utf-8") as f:
            self.manifest_contents.append(f.read())
        self.manifest_file = local_file
        return f"builder:{remote_file}"


class TestRemotePatchManager(unittest.TestCase):
    def _manager(self, copier=None, locator=fake_locator) -> RemotePatchManager:
        config = RemoteBuildConfig(build_server="builder", build_path="~/builds/app")
        return RemotePatchManager.from_collaborators(
            config,
            locator=locator,
            copier=copier or FakeCopier(),
        )

    def test_build_plan(self) -> None:
        plan = self._manager().build_plan(MANIFEST)

        self.assertTrue(plan.has_patches)
        self.assertEqual([w.name for w in plan.workspaces], ["a", "b"])
        self.assertIn('a-crate = { path = "../a/src/a-crate" }', plan.manifest_text)
        self.assertIn('b-crate = { path = "../b/src/b-crate" }', plan.manifest_text)
        self.assertIn('git-crate = { git = "https://some-url/test/test" }', plan.manifest_text)
        self.assertTrue(plan.manifest_text.startswith('[package]\nname = "app"\n\n'))

        kinds = [op.kind for op in plan.operations]
        self.assertEqual(
            kinds,
            [TransferKind.SYNC_WORKSPACE, TransferKind.SYNC_WORKSPACE, TransferKind.COPY_MANIFEST],
        )
        self.assertEqual(plan.apply_order, [op.op_id for op in plan.operations])

    def test_apply_plan_copies_workspaces_then_manifest(self) -> None:
        copier = FakeCopier()
        mgr = self._manager(copier)

        plan = mgr.build_plan(MANIFEST)
        result = mgr.apply_plan(plan)

        self.assertEqual(result.status, "success")
        self.assertEqual(
            copier.calls,
            [
                ("sync_directory", str(Path("/some/prefix/a")), "../a"),
                ("sync_directory", str(Path("/some/prefix/b")), "../b"),
                ("copy_file", "Cargo.toml"),
            ],
        )
        self.assertEqual(copier.manifest_contents, [plan.manifest_text])
        self.assertFalse(os.path.exists(copier.manifest_file))
        self.assertEqual(result.summary["success"], 3)
        self.assertEqual(result.summary["SYNC_WORKSPACE"], 2)
        self.assertEqual(result.results[-1].destination, "builder:Cargo.toml")

    def test_no_patch_section_is_noop(self) -> None:
        copier = FakeCopier()
        mgr = self._manager(copier)
        text = '[package]\nname = "app"\n'

        plan = mgr.build_plan(text)
        result = mgr.apply_plan(plan)

        self.assertFalse(plan.has_patches)
        self.assertEqual(plan.manifest_text, text)
        self.assertEqual(plan.operations, [])
        self.assertEqual(result.status, "skipped")
        self.assertEqual(copier.calls, [])

    def test_only_git_patches_still_uploads_manifest(self) -> None:
        copier = FakeCopier()
        mgr = self._manager(copier)
        text = '[patch.crates-io]\nfoo = { git = "https://example.com/foo" }\n'

        result = mgr.apply_plan(mgr.build_plan(text))

        self.assertEqual(copier.calls, [("copy_file", "Cargo.toml")])
        self.assertEqual(copier.manifest_contents, [text])
        self.assertEqual(result.workspaces, [])

    def test_transfer_failure_aborts_and_reports_progress(self) -> None:
        copier = FakeCopier()

        def bad_sync(local_dir, remote_dir):
            if remote_dir == "../b":
                raise TransferError("rsync failed")
            copier.calls.append(("sync_directory", str(local_dir), str(remote_dir)))
            return "ok"

        copier.sync_directory = bad_sync  # type: ignore[assignment]
        mgr = self._manager(copier)
        plan = mgr.build_plan(MANIFEST)

        with self.assertRaises(TransferError) as ctx:
            mgr.apply_plan(plan)

        self.assertEqual(ctx.exception.stage, Stage.TRANSFER_WORKSPACE)
        self.assertEqual(ctx.exception.details["completed"], [plan.apply_order[0]])
        self.assertNotIn(("copy_file", "Cargo.toml"), copier.calls)

    def test_unknown_op_id_in_apply_order(self) -> None:
        mgr = self._manager()
        plan = mgr.build_plan(MANIFEST)
        plan.apply_order.append("missing")

        with self.assertRaises(InvalidArgumentError):
            mgr.apply_plan(plan)

    def test_parse_error(self) -> None:
        with self.assertRaises(ManifestParseError):
            self._manager().build_plan("[patch\n")

    def test_handle_patches_end_to_end(self) -> None:
        copier = FakeCopier()
        mgr = self._manager(copier)
        with tempfile.TemporaryDirectory() as td:
            manifest = os.path.join(td, "Cargo.toml")
            with open(manifest, "w", encoding="utf-8") as f:
                f.write(MANIFEST)

            result = mgr.handle_patches(manifest)

            with open(manifest, encoding="utf-8") as f:
                self.assertEqual(f.read(), MANIFEST)

        self.assertEqual(result.status, "success")
        self.assertEqual([w.name for w in result.workspaces], ["a", "b"])
        self.assertIn("../a/src/subfolder/a-other-crate", copier.manifest_contents[0])

    def test_handle_patches_missing_manifest(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ManifestReadError):
                self._manager().handle_patches(os.path.join(td, "Cargo.toml"))

    def test_unlocatable_workspace_transfers_nothing(self) -> None:
        copier = FakeCopier()
        mgr = self._manager(copier)
        text = '[patch.crates-io]\nx = { path = "/elsewhere/x" }\n'

        with self.assertRaises(WorkspaceNotFoundError):
            mgr.build_plan(text)
        self.assertEqual(copier.calls, [])


if __name__ == "__main__":
    unittest.main()
