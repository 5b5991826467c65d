import unittest
from pathlib import Path
from tempfile import TemporaryDirectory

from pkgtag.package_manager.installed import (
    detect_from_installed_packages,
    find_install_marker,
)
from pkgtag.package_manager.types import PackageManagerIdentity, PackageManagerKind


def touch(path: Path) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("", encoding="utf-8")


class TestInstalledPackageDetection(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = TemporaryDirectory()
        self.root = Path(self._tmp.name)

    def tearDown(self) -> None:
        self._tmp.cleanup()

    def assertDetected(self, cwd: Path, kind: PackageManagerKind) -> None:
        self.assertEqual(
            detect_from_installed_packages(cwd),
            PackageManagerIdentity(kind=kind, executable=kind.value),
        )

    def test_pnpm_modules_yaml(self) -> None:
        touch(self.root / "node_modules" / ".modules.yaml")
        self.assertDetected(self.root, PackageManagerKind.PNPM)

    def test_yarn_integrity(self) -> None:
        touch(self.root / "node_modules" / ".yarn-integrity")
        self.assertDetected(self.root, PackageManagerKind.YARN)

    def test_yarn_berry_state(self) -> None:
        touch(self.root / "node_modules" / ".yarn-state.yml")
        self.assertDetected(self.root, PackageManagerKind.YARN)

    def test_npm_hidden_lockfile(self) -> None:
        touch(self.root / "node_modules" / ".package-lock.json")
        self.assertDetected(self.root, PackageManagerKind.NPM)

    def test_lockfiles(self) -> None:
        for name, kind in (
            ("pnpm-lock.yaml", PackageManagerKind.PNPM),
            ("yarn.lock", PackageManagerKind.YARN),
            ("package-lock.json", PackageManagerKind.NPM),
            ("npm-shrinkwrap.json", PackageManagerKind.NPM),
        ):
            with self.subTest(lockfile=name):
                project = self.root / name.replace(".", "_")
                touch(project / name)
                self.assertDetected(project, kind)

    def test_install_metadata_wins_over_lockfile_in_same_directory(self) -> None:
        touch(self.root / "package-lock.json")
        touch(self.root / "node_modules" / ".modules.yaml")
        self.assertDetected(self.root, PackageManagerKind.PNPM)

    def test_nearest_directory_wins(self) -> None:
        touch(self.root / "yarn.lock")
        nested = self.root / "packages" / "app"
        touch(nested / "pnpm-lock.yaml")
        self.assertDetected(nested, PackageManagerKind.PNPM)

    def test_walks_up_to_ancestor(self) -> None:
        touch(self.root / "yarn.lock")
        nested = self.root / "packages" / "app" / "src"
        nested.mkdir(parents=True)
        self.assertDetected(nested, PackageManagerKind.YARN)

    def test_dependency_directories_are_skipped(self) -> None:
        touch(self.root / "pnpm-lock.yaml")
        dependency = self.root / "node_modules" / "left-pad"
        touch(dependency / "npm-shrinkwrap.json")
        self.assertDetected(dependency, PackageManagerKind.PNPM)

    def test_directory_named_like_marker_is_ignored(self) -> None:
        (self.root / "project" / "yarn.lock").mkdir(parents=True)
        self.assertIsNone(find_install_marker(self.root / "project"))

    def test_nothing_found(self) -> None:
        empty = self.root / "empty"
        empty.mkdir()
        self.assertIsNone(find_install_marker(empty))


if __name__ == "__main__":
    unittest.main()
