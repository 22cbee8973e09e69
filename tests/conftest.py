"""Shared fixtures: isolated config and in-memory collaborators."""

from unittest.mock import MagicMock

import pytest

import appforge.config as config_module
from appforge.cli.commands import config_cmd
from appforge.config import reset_config
from appforge.core.collaborators import (
    DependencyTreeProvider,
    Generator,
    PromptRunner,
    Reader,
    ReaderCollection,
    ResourceCollectionProvider,
    ResourceCollections,
)
from appforge.core.models import (
    DependencyNode,
    GenerationResult,
    OwningProject,
    Project,
    ProjectConfiguration,
    ProjectPaths,
    ProjectResources,
    Resource,
)
from appforge.create import CreateServices, ResourceIndex
from appforge.generators import describe_request


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the config file at a temp dir and clear APPFORGE_* env vars."""
    config_dir = tmp_path / "config"
    config_file = config_dir / "config.json"
    monkeypatch.setattr(config_module, "CONFIG_DIR", config_dir)
    monkeypatch.setattr(config_module, "CONFIG_FILE", config_file)
    monkeypatch.setattr(config_cmd, "CONFIG_FILE", config_file)
    for var in (
        "APPFORGE_MODE",
        "APPFORGE_RESOURCE_GLOB",
        "APPFORGE_THEME_LIBRARY_TYPE",
        "APPFORGE_PROJECT_FILE",
        "APPFORGE_GENERATOR",
    ):
        monkeypatch.delenv(var, raising=False)
    reset_config()
    yield config_file
    reset_config()


# =============================================================================
# In-memory collaborators
# =============================================================================


class StubReader(Reader):
    """Returns the same resources for every pattern and counts the scans."""

    def __init__(self, dependency_id: str, owner: OwningProject, paths: list[str]):
        self.dependency_id = dependency_id
        self.owner = owner
        self.paths = paths
        self.patterns: list[str] = []

    def by_glob(self, pattern):
        self.patterns.append(pattern)
        return [Resource(path=p, owning_project=self.owner) for p in self.paths]


class StubProjects(DependencyTreeProvider):
    def __init__(self, tree: DependencyNode, project: Project):
        self.tree = tree
        self.project = project

    def generate_dependency_tree(self):
        return self.tree

    def generate_project_tree(self, tree):
        return tree

    def process_tree(self, project_tree):
        return self.project


class StubResources(ResourceCollectionProvider):
    def __init__(self, readers: list[Reader]):
        self.readers = readers

    def create_collections_for_tree(self, tree):
        return ResourceCollections(dependencies=ReaderCollection(readers=self.readers))


class ScriptedPrompts(PromptRunner):
    """Answers questions by name from a script and records what was asked."""

    def __init__(self, answers: dict):
        self.answers = answers
        self.asked = []

    def run(self, question):
        self.asked.append(question)
        return self.answers[question.name]

    @property
    def asked_names(self) -> list[str]:
        return [q.name for q in self.asked]


def _library(name: str, lib_type: str = "library"):
    metadata = {"name": name}
    node = DependencyNode(id=name, type=lib_type, metadata=metadata)
    owner = OwningProject(name=name, type=lib_type, metadata=metadata)
    reader = StubReader(name, owner, [f"/resources/{name}/library.js"])
    return node, reader


def build_world(components=(), themes=()):
    """Application tree with one direct dependency per component and theme."""
    nodes, readers = [], []
    for name in components:
        node, reader = _library(name)
        nodes.append(node)
        readers.append(reader)
    for name in themes:
        node, reader = _library(name, "theme-library")
        nodes.append(node)
        readers.append(reader)
    tree = DependencyNode(id="my.app", type="application", dependencies=nodes)
    return tree, readers


def make_generator(status: str | None = "use-request") -> MagicMock:
    """Generator mock reporting status, or the preview message by default."""
    generator = MagicMock(spec=Generator)
    if status == "use-request":
        generator.create.side_effect = lambda *, name, meta_information, project: (
            GenerationResult(status_message=describe_request(meta_information))
        )
    else:
        generator.create.return_value = GenerationResult(status_message=status)
    return generator


@pytest.fixture
def make_index():
    def _make(components=(), themes=()):
        tree, readers = build_world(components, themes)
        collections = ResourceCollections(dependencies=ReaderCollection(readers=readers))
        return ResourceIndex(tree, collections)

    return _make


@pytest.fixture
def make_project():
    def _make(project_type="application", webapp="app", entry_point=None, path=None):
        return Project(
            type=project_type,
            path=path,
            entry_point=entry_point,
            resources=ProjectResources(
                configuration=ProjectConfiguration(paths=ProjectPaths(webapp=webapp))
            ),
        )

    return _make


@pytest.fixture
def make_services(make_project):
    def _make(
        components=(),
        themes=(),
        *,
        project_type="application",
        webapp="app",
        entry_point=None,
        status="use-request",
        answers=None,
    ):
        tree, readers = build_world(components, themes)
        project = make_project(project_type, webapp, entry_point)
        return CreateServices(
            projects=StubProjects(tree, project),
            resources=StubResources(readers),
            generator=make_generator(status),
            prompts=ScriptedPrompts(answers) if answers is not None else None,
        )

    return _make
