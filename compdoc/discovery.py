"""Component discovery across a library's components tree."""

from __future__ import annotations

from pathlib import Path
from typing import Dict, Iterator, List, Tuple

from .config import GeneratorConfig
from .errors import MissingChild
from .extraction.source_map import has_component_artifacts
from .logging import get_logger
from .models import ComponentCandidate

logger = get_logger("discovery")

COMPONENTS_DIR = "components"
_SKIPPED_DIRS = {"node_modules", "__pycache__"}


def _is_skipped(path: Path) -> bool:
    return path.name.startswith(".") or path.name in _SKIPPED_DIRS


class ComponentDiscovery:
    """Enumerates component directories and applies the inclusion policy."""

    def __init__(self, library_path: Path, config: GeneratorConfig) -> None:
        self.library_path = Path(library_path)
        self.config = config

    @property
    def components_root(self) -> Path:
        return self.library_path / COMPONENTS_DIR

    def walk_candidates(self) -> List[ComponentCandidate]:
        """Every directory under a component group that carries its own artifacts."""
        root = self.components_root
        if not root.is_dir():
            logger.error("Components path not found: %s", root)
            return []

        excluded_groups = set(self.config.exclude_groups)
        excluded_names = set(self.config.exclude_components)
        candidates: List[ComponentCandidate] = []
        seen: Dict[str, Path] = {}
        for group in sorted(root.iterdir()):
            if not group.is_dir() or _is_skipped(group) or group.name in excluded_groups:
                continue
            for directory in self._walk(group):
                if directory.name in excluded_names or not has_component_artifacts(directory):
                    continue
                if directory.name in seen:
                    logger.debug(
                        "Ignoring duplicate component %s at %s (already found at %s)",
                        directory.name,
                        directory,
                        seen[directory.name],
                    )
                    continue
                seen[directory.name] = directory
                candidates.append(
                    ComponentCandidate(
                        name=directory.name, path=str(directory), category=group.name
                    )
                )
        return candidates

    def _walk(self, directory: Path) -> Iterator[Path]:
        stack = [directory]
        while stack:
            current = stack.pop()
            yield current
            try:
                children = sorted(
                    child for child in current.iterdir() if child.is_dir() and not _is_skipped(child)
                )
            except OSError as exc:
                logger.warning("Cannot list %s: %s", current, exc)
                continue
            stack.extend(reversed(children))

    def find_components(self) -> List[ComponentCandidate]:
        """Allow-listed candidates followed by alias candidates for discovered sources."""
        allowed = set(self.config.include_components)
        components = [
            candidate for candidate in self.walk_candidates() if candidate.name in allowed
        ]
        by_name = {candidate.name: candidate for candidate in components}
        for alias, source_name in self.config.aliases.items():
            source = by_name.get(source_name)
            if source is None:
                logger.debug("Alias %s skipped: %s was not discovered", alias, source_name)
                continue
            if alias in by_name:
                logger.debug("Alias %s skipped: a component with that name exists", alias)
                continue
            candidate = ComponentCandidate(
                name=alias, path=source.path, category=source.category, alias_of=source_name
            )
            by_name[alias] = candidate
            components.append(candidate)
        return components

    def declared_children(self, component_name: str) -> List[Tuple[str, str]]:
        return list(self.config.child_components.get(component_name, {}).items())

    def resolve_child_path(
        self, parent_name: str, parent_dir: Path, child_name: str, relative_path: str
    ) -> Path:
        """Return the child's directory, raising MissingChild when it is absent."""
        child_dir = Path(parent_dir) / relative_path
        if not child_dir.is_dir():
            raise MissingChild(parent_name, child_name, str(child_dir))
        return child_dir


__all__ = ["COMPONENTS_DIR", "ComponentDiscovery"]
