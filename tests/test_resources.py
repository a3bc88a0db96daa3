from __future__ import annotations

import importlib
import os
import sys
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

from confloc.paths import url_to_path
from confloc.resources import (
    DirectoryResourceLoader,
    PackageResourceLoader,
    get_context_loader,
    system_loader,
    use_context_loader,
)


class StubResourceLoader:
    def __init__(self, resources: dict[str, str]):
        self.resources = resources
        self.requested: list[str] = []

    def get_resource(self, name: str) -> str | None:
        self.requested.append(name)
        return self.resources.get(name)


class DirectoryResourceLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        self.root = Path(self.tmp.name)
        self.first = self.root / "first"
        self.second = self.root / "second"
        (self.first / "conf").mkdir(parents=True)
        (self.second / "conf").mkdir(parents=True)

    def tearDown(self) -> None:
        self.tmp.cleanup()

    def test_finds_nested_resource(self) -> None:
        target = self.second / "conf" / "app.xml"
        target.write_text("<config/>", encoding="utf-8")
        loader = DirectoryResourceLoader(roots=(self.first, self.second))

        url = loader.get_resource("conf/app.xml")

        self.assertEqual(url_to_path(url), Path(os.path.abspath(target)))

    def test_first_root_wins(self) -> None:
        (self.first / "conf" / "app.xml").write_text("first", encoding="utf-8")
        (self.second / "conf" / "app.xml").write_text("second", encoding="utf-8")
        loader = DirectoryResourceLoader(roots=(self.first, self.second))

        url = loader.get_resource("conf/app.xml")

        self.assertEqual(url_to_path(url).read_text(encoding="utf-8"), "first")

    def test_rejects_names_escaping_the_roots(self) -> None:
        (self.root / "secret.xml").write_text("x", encoding="utf-8")
        loader = DirectoryResourceLoader(roots=(self.first,))

        self.assertIsNone(loader.get_resource("../secret.xml"))
        self.assertIsNone(loader.get_resource(str(self.root / "secret.xml")))
        self.assertIsNone(loader.get_resource(""))

    def test_missing_resource(self) -> None:
        loader = DirectoryResourceLoader(roots=(self.first,))
        self.assertIsNone(loader.get_resource("conf/missing.xml"))


class PackageResourceLoaderTests(unittest.TestCase):
    def setUp(self) -> None:
        self.tmp = tempfile.TemporaryDirectory()
        package_dir = Path(self.tmp.name) / "confloc_test_resources"
        (package_dir / "defaults").mkdir(parents=True)
        (package_dir / "__init__.py").write_text("", encoding="utf-8")
        (package_dir / "defaults" / "app.properties").write_text("a=1\n", encoding="utf-8")
        self.package_dir = package_dir
        sys.path.insert(0, self.tmp.name)
        importlib.invalidate_caches()

    def tearDown(self) -> None:
        sys.path.remove(self.tmp.name)
        sys.modules.pop("confloc_test_resources", None)
        self.tmp.cleanup()

    def test_finds_resource_inside_package(self) -> None:
        loader = PackageResourceLoader("confloc_test_resources")

        url = loader.get_resource("defaults/app.properties")

        self.assertEqual(
            url_to_path(url),
            Path(os.path.abspath(self.package_dir / "defaults" / "app.properties")),
        )

    def test_missing_resource_inside_package(self) -> None:
        loader = PackageResourceLoader("confloc_test_resources")
        self.assertIsNone(loader.get_resource("defaults/missing.properties"))

    def test_unknown_package(self) -> None:
        loader = PackageResourceLoader("confloc_no_such_package")
        self.assertIsNone(loader.get_resource("app.properties"))


class ContextLoaderTests(unittest.TestCase):
    def test_no_context_loader_by_default(self) -> None:
        self.assertIsNone(get_context_loader())

    def test_context_loader_is_scoped(self) -> None:
        loader = StubResourceLoader({})
        with use_context_loader(loader):
            self.assertIs(get_context_loader(), loader)
        self.assertIsNone(get_context_loader())


class SystemLoaderTests(unittest.TestCase):
    def test_configured_resource_path_precedes_sys_path(self) -> None:
        with tempfile.TemporaryDirectory() as first, tempfile.TemporaryDirectory() as second:
            with patch.dict(os.environ, {"CONFLOC_RESOURCE_PATH": os.pathsep.join([first, second])}):
                loader = system_loader()

        self.assertEqual(loader.roots[:2], (Path(first), Path(second)))

    def test_sys_path_directories_are_included(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            with patch.object(sys, "path", [tmp, os.path.join(tmp, "missing-dir")]):
                with patch.dict(os.environ, {"CONFLOC_RESOURCE_PATH": ""}):
                    loader = system_loader()

        self.assertEqual(loader.roots, (Path(tmp),))


if __name__ == "__main__":
    unittest.main()
