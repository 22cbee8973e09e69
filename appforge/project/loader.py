"""Local project loader: dependency graph from YAML project descriptors.

Each project directory holds a descriptor (appforge.yaml by default):

    type: application
    metadata:
      name: my.app
    resources:
      configuration:
        paths:
          webapp: webapp
    dependencies:
      - path: ../sample-lib
      - id: themelib_sap_fancy_theme
        path: ../themes/fancy

Dependency paths are relative to the declaring project. A dependency shared
by several projects becomes one node; a dependency that points back at one
of its ancestors is dropped with a warning.
"""

import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ..config import CreateConfig
from ..core.collaborators import DependencyTreeProvider
from ..core.models import (
    DependencyNode,
    Project,
    ProjectConfiguration,
    ProjectResources,
)
from ..create.errors import ProjectNotFoundError

logger = logging.getLogger(__name__)


class LocalProjectProvider(DependencyTreeProvider):
    """Builds the dependency graph from descriptors on disk."""

    def __init__(self, root: Path | str | None = None, settings: CreateConfig | None = None):
        self.root = Path(root or Path.cwd()).resolve()
        self.settings = settings or CreateConfig()

    # ── Descriptor I/O ──

    def _descriptor_path(self, directory: Path) -> Path:
        return directory / self.settings.project_file

    def _read_descriptor(self, directory: Path) -> dict[str, Any]:
        """Parse a descriptor.

        Raises:
            FileNotFoundError: No descriptor in directory.
            ValueError: The descriptor is not a YAML mapping.
        """
        path = self._descriptor_path(directory)
        with open(path, encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"{path} must contain a mapping")
        return data

    # ── DependencyTreeProvider ──

    def generate_dependency_tree(self) -> DependencyNode:
        """Load the root descriptor and every dependency reachable from it.

        Raises:
            ProjectNotFoundError: The root descriptor is missing or unreadable.
        """
        try:
            data = self._read_descriptor(self.root)
        except FileNotFoundError:
            raise ProjectNotFoundError(
                f"Failed to read project: no {self.settings.project_file} in {self.root}"
            ) from None
        except (OSError, ValueError) as e:
            raise ProjectNotFoundError(f"Failed to read project: {e}") from e

        nodes: dict[str, DependencyNode] = {}
        return self._build_node(self.root, data, None, nodes, ancestors=())

    def _build_node(
        self,
        directory: Path,
        data: dict[str, Any],
        declared_id: str | None,
        nodes: dict[str, DependencyNode],
        ancestors: tuple[str, ...],
    ) -> DependencyNode:
        metadata = data.get("metadata") or {}
        node_id = declared_id or metadata.get("name") or directory.name
        configuration = (data.get("resources") or {}).get("configuration") or {}
        node = DependencyNode(
            id=node_id,
            type=data.get("type", "library"),
            metadata=metadata,
            path=directory,
            configuration=configuration,
        )
        nodes[node_id] = node

        chain = ancestors + (node_id,)
        for entry in data.get("dependencies") or []:
            child = self._load_dependency(directory, entry, nodes, chain)
            if child is not None:
                node.dependencies.append(child)
        return node

    def _load_dependency(
        self,
        parent_dir: Path,
        entry: dict[str, Any] | str,
        nodes: dict[str, DependencyNode],
        ancestors: tuple[str, ...],
    ) -> DependencyNode | None:
        if isinstance(entry, str):
            entry = {"path": entry}
        dep_dir = (parent_dir / entry.get("path", entry.get("id", ""))).resolve()
        declared_id = entry.get("id")

        try:
            data = self._read_descriptor(dep_dir)
        except FileNotFoundError:
            logger.warning("No %s in %s, treating it as a plain library", self.settings.project_file, dep_dir)
            data = {"metadata": {"name": declared_id or dep_dir.name}}
        except (OSError, ValueError) as e:
            logger.warning("Skipping dependency %s: %s", dep_dir, e)
            return None

        dep_id = declared_id or (data.get("metadata") or {}).get("name") or dep_dir.name
        if dep_id in ancestors:
            logger.warning("Dependency cycle through %s, not following it", dep_id)
            return None
        if dep_id in nodes:
            return nodes[dep_id]
        return self._build_node(dep_dir, data, dep_id, nodes, ancestors)

    def generate_project_tree(self, tree: DependencyNode) -> DependencyNode:
        """Fill default paths into the root configuration."""
        configuration = ProjectConfiguration.model_validate(
            _with_default_paths(tree.configuration, self.settings)
        )
        return tree.model_copy(update={"configuration": configuration.model_dump()})

    def process_tree(self, project_tree: DependencyNode) -> Project:
        configuration = ProjectConfiguration.model_validate(project_tree.configuration)
        project_dir = project_tree.path or self.root
        return Project(
            type=project_tree.type,
            metadata=project_tree.metadata,
            path=project_dir,
            entry_point=self.find_entry_point(project_dir / configuration.paths.webapp),
            resources=ProjectResources(configuration=configuration),
        )

    def find_entry_point(self, webapp_dir: Path) -> str | None:
        """Root view declared by the web-app manifest, if any."""
        manifest = webapp_dir / self.settings.manifest_file
        if not manifest.is_file():
            return None
        try:
            with open(manifest, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning("Failed to read %s: %s", manifest, e)
            return None
        if not isinstance(data, dict):
            return None

        root_view = (data.get("sap.ui5") or {}).get("rootView") or data.get("rootView")
        if isinstance(root_view, dict):
            root_view = root_view.get("viewName")
        return str(root_view) if root_view else None


def _with_default_paths(configuration: dict[str, Any], settings: CreateConfig) -> dict[str, Any]:
    paths = dict(configuration.get("paths") or {})
    paths.setdefault("webapp", settings.default_webapp)
    paths.setdefault("src", settings.default_src)
    return {**configuration, "paths": paths}
