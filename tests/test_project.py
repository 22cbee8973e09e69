"""Tests for the local project loader and filesystem resource readers."""

import json

import pytest
import yaml

from appforge.config import CreateConfig
from appforge.core.models import OwningProject
from appforge.create import ProjectNotFoundError, ResourceIndex
from appforge.project import (
    FileSystemCollectionProvider,
    FileSystemReader,
    LocalProjectProvider,
)


def _write_descriptor(directory, data, name="appforge.yaml"):
    directory.mkdir(parents=True, exist_ok=True)
    (directory / name).write_text(yaml.safe_dump(data))


def _touch(path):
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text("// generated for tests\n")


@pytest.fixture
def workspace(tmp_path):
    """An application with one library, one theme library and a shared dependency."""
    app_dir = tmp_path / "app"
    _write_descriptor(
        app_dir,
        {
            "type": "application",
            "metadata": {"name": "my.app"},
            "resources": {"configuration": {"paths": {"webapp": "webapp"}}},
            "dependencies": [
                {"path": "../sample"},
                {"id": "themelib_sap_fancy_theme", "path": "../fancy"},
                {"path": "../base"},
            ],
        },
    )
    _write_descriptor(
        tmp_path / "sample",
        {
            "type": "library",
            "metadata": {"name": "sample"},
            "dependencies": [{"path": "../base"}],
        },
    )
    _touch(tmp_path / "sample" / "src" / "library.js")
    _write_descriptor(
        tmp_path / "fancy",
        {"type": "theme-library", "metadata": {"name": "themelib_sap_fancy_theme"}},
    )
    _touch(tmp_path / "fancy" / "src" / "themes" / "library.source.less")
    _write_descriptor(tmp_path / "base", {"type": "library", "metadata": {"name": "base"}})
    return app_dir


class TestLocalProjectProvider:
    def test_builds_dependency_graph(self, workspace):
        tree = LocalProjectProvider(workspace).generate_dependency_tree()

        assert tree.id == "my.app"
        assert tree.type == "application"
        assert [d.id for d in tree.dependencies] == [
            "sample",
            "themelib_sap_fancy_theme",
            "base",
        ]
        assert tree.dependencies[1].type == "theme-library"

    def test_shared_dependency_is_one_node(self, workspace):
        tree = LocalProjectProvider(workspace).generate_dependency_tree()
        sample, _, base = tree.dependencies
        assert sample.dependencies[0] is base

    def test_cycle_is_cut(self, tmp_path):
        _write_descriptor(
            tmp_path / "app",
            {"type": "application", "metadata": {"name": "app"}, "dependencies": ["../lib"]},
        )
        _write_descriptor(
            tmp_path / "lib",
            {"metadata": {"name": "lib"}, "dependencies": ["../app"]},
        )
        tree = LocalProjectProvider(tmp_path / "app").generate_dependency_tree()
        assert [d.id for d in tree.dependencies] == ["lib"]
        assert tree.dependencies[0].dependencies == []

    def test_dependency_without_descriptor(self, tmp_path):
        _write_descriptor(
            tmp_path / "app",
            {"type": "application", "dependencies": [{"id": "plain", "path": "../plain"}]},
        )
        tree = LocalProjectProvider(tmp_path / "app").generate_dependency_tree()
        assert tree.dependencies[0].id == "plain"
        assert tree.dependencies[0].type == "library"

    def test_missing_descriptor(self, tmp_path):
        with pytest.raises(ProjectNotFoundError) as exc_info:
            LocalProjectProvider(tmp_path).generate_dependency_tree()
        assert "Failed to read project" in str(exc_info.value)
        assert exc_info.value.exit_code == 3

    def test_malformed_descriptor(self, tmp_path):
        (tmp_path / "appforge.yaml").write_text("- just\n- a list\n")
        with pytest.raises(ProjectNotFoundError):
            LocalProjectProvider(tmp_path).generate_dependency_tree()

    def test_custom_project_file(self, tmp_path):
        _write_descriptor(tmp_path, {"type": "application"}, name="project.yaml")
        provider = LocalProjectProvider(tmp_path, CreateConfig(project_file="project.yaml"))
        assert provider.generate_dependency_tree().type == "application"

    def test_process_tree_fills_default_paths(self, tmp_path):
        _write_descriptor(tmp_path, {"type": "application"})
        provider = LocalProjectProvider(tmp_path)
        project = provider.process_tree(
            provider.generate_project_tree(provider.generate_dependency_tree())
        )

        assert project.is_application
        assert project.path == tmp_path.resolve()
        assert project.webapp_path == "webapp"
        assert project.resources.configuration.paths.src == "src"
        assert project.entry_point is None

    def test_entry_point_from_manifest(self, workspace):
        manifest = workspace / "webapp" / "manifest.json"
        manifest.parent.mkdir(parents=True)
        manifest.write_text(
            json.dumps({"sap.ui5": {"rootView": {"viewName": "my.app.view.App"}}})
        )
        provider = LocalProjectProvider(workspace)
        project = provider.process_tree(
            provider.generate_project_tree(provider.generate_dependency_tree())
        )
        assert project.entry_point == "my.app.view.App"

    def test_top_level_root_view(self, tmp_path):
        (tmp_path / "manifest.json").write_text(json.dumps({"rootView": "app.view.Main"}))
        assert LocalProjectProvider(tmp_path).find_entry_point(tmp_path) == "app.view.Main"

    def test_unreadable_manifest_means_no_entry_point(self, tmp_path):
        (tmp_path / "manifest.json").write_text("{not json")
        assert LocalProjectProvider(tmp_path).find_entry_point(tmp_path) is None


class TestFileSystemReader:
    def _reader(self, base, excludes=None):
        return FileSystemReader(
            dependency_id="sample",
            fs_base_path=base,
            virtual_base_path="/resources/sample/",
            project=OwningProject(name="sample", metadata={"name": "sample"}),
            excludes=excludes,
        )

    def test_maps_files_to_virtual_paths(self, tmp_path):
        _touch(tmp_path / "library.js")
        _touch(tmp_path / "controls" / "Button.js")

        paths = [r.path for r in self._reader(tmp_path).by_glob("/resources/**/*")]
        assert paths == [
            "/resources/sample/controls/Button.js",
            "/resources/sample/library.js",
        ]

    def test_pattern_filters(self, tmp_path):
        _touch(tmp_path / "library.js")
        _touch(tmp_path / "themes" / "base.less")

        paths = [r.path for r in self._reader(tmp_path).by_glob("/resources/**/*.less")]
        assert paths == ["/resources/sample/themes/base.less"]

    def test_excludes(self, tmp_path):
        _touch(tmp_path / "library.js")
        _touch(tmp_path / "test" / "unit.js")

        reader = self._reader(tmp_path, excludes=["/resources/sample/test/*"])
        assert [r.path for r in reader.by_glob("/resources/**/*")] == [
            "/resources/sample/library.js"
        ]

    def test_missing_directory(self, tmp_path):
        assert self._reader(tmp_path / "nope").by_glob("/resources/**/*") == []


class TestFileSystemCollectionProvider:
    def test_one_reader_per_direct_dependency(self, workspace):
        tree = LocalProjectProvider(workspace).generate_dependency_tree()
        collections = FileSystemCollectionProvider().create_collections_for_tree(tree)
        assert [r.dependency_id for r in collections.dependencies.readers] == [
            "sample",
            "themelib_sap_fancy_theme",
            "base",
        ]

    def test_index_over_local_project(self, workspace):
        tree = LocalProjectProvider(workspace).generate_dependency_tree()
        index = ResourceIndex(
            tree, FileSystemCollectionProvider().create_collections_for_tree(tree)
        )

        # base has no src directory, so it exposes nothing
        assert [i.name for i in index.components()] == [
            "sample",
            "themelib_sap_fancy_theme",
        ]
        assert index.theme_names() == ["sap_fancy_theme"]
        assert index.match_theme("sap_fancy_theme") == "sap_fancy_theme"

    def test_dotted_name_becomes_path(self, tmp_path):
        _write_descriptor(
            tmp_path / "app",
            {"type": "application", "dependencies": ["../lib"]},
        )
        _write_descriptor(tmp_path / "lib", {"metadata": {"name": "my.lib"}})
        _touch(tmp_path / "lib" / "src" / "library.js")

        tree = LocalProjectProvider(tmp_path / "app").generate_dependency_tree()
        collections = FileSystemCollectionProvider().create_collections_for_tree(tree)
        resources = collections.dependencies.readers[0].by_glob("/resources/**/*")
        assert [r.path for r in resources] == ["/resources/my/lib/library.js"]
        assert resources[0].owning_project.namespace == "my.lib"
