"""Recovers original TypeScript sources embedded in JavaScript source maps."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional

from ..errors import SourceNotFound
from ..logging import get_logger
from ..models import ComponentSources, SourceMapArtifact

PROPS_SUFFIX = ".props.js.map"
COMPONENT_SUFFIX = ".component.js.map"
STYLES_SUFFIX = ".styles.js.map"
COMPILED_COMPONENT_SUFFIX = ".component.js"

logger = get_logger("source_map")


def load_source_map(map_path: Path) -> SourceMapArtifact:
    """Parse a source map file, raising SourceNotFound when it cannot be used."""
    try:
        payload = json.loads(Path(map_path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as exc:
        raise SourceNotFound(f"Error reading source map {map_path}: {exc}") from exc
    except json.JSONDecodeError as exc:
        raise SourceNotFound(f"Invalid source map {map_path}: {exc}") from exc
    if not isinstance(payload, dict):
        raise SourceNotFound(f"Source map {map_path} is not a JSON object")

    sources = payload.get("sources")
    contents = payload.get("sourcesContent")
    return SourceMapArtifact(
        sources=tuple(item if isinstance(item, str) else "" for item in sources)
        if isinstance(sources, list)
        else (),
        sources_content=tuple(
            item if isinstance(item, str) else None for item in contents
        )
        if isinstance(contents, list)
        else (),
    )


class SourceLocator:
    """Reads source map artifacts and returns original file text and names."""

    def read_source_map(self, map_path: Path) -> Optional[SourceMapArtifact]:
        try:
            return load_source_map(map_path)
        except SourceNotFound as exc:
            logger.warning("%s", exc)
            return None

    def extract_source_content(self, map_path: Path, source_index: int = 0) -> Optional[str]:
        """Return the original source text at ``source_index`` or None."""
        artifact = self.read_source_map(map_path)
        if artifact is None:
            return None

        if not artifact.sources_content:
            logger.warning("No source content found in %s", map_path)
            return None

        if source_index < 0 or source_index >= len(artifact.sources_content):
            logger.warning("Source index %d out of bounds for %s", source_index, map_path)
            return None

        content = artifact.sources_content[source_index]
        if not content:
            logger.warning("Source %d of %s has no embedded content", source_index, map_path)
        return content or None

    def get_source_file_name(self, map_path: Path, source_index: int = 0) -> Optional[str]:
        """Return the original file name recorded at ``source_index`` or None."""
        artifact = self.read_source_map(map_path)
        if artifact is None:
            return None

        if not artifact.sources:
            logger.warning("No source names found in %s", map_path)
            return None

        if source_index < 0 or source_index >= len(artifact.sources):
            logger.warning("Source index %d out of bounds for %s", source_index, map_path)
            return None

        return artifact.sources[source_index] or None

    def extract_component_sources(self, component_dir: Path) -> ComponentSources:
        """Recover the props, component and styles sources of one component directory."""
        component_dir = Path(component_dir)
        sources = ComponentSources()
        try:
            files = sorted(entry.name for entry in component_dir.iterdir() if entry.is_file())
        except OSError as exc:
            logger.warning("Cannot list component directory %s: %s", component_dir, exc)
            return sources

        props_map = _pick_artifact(files, component_dir.name, PROPS_SUFFIX)
        if props_map:
            sources.props = self.extract_source_content(component_dir / props_map)
            sources.props_file = self.get_source_file_name(component_dir / props_map)

        component_map = _pick_artifact(files, component_dir.name, COMPONENT_SUFFIX)
        if component_map:
            sources.component = self.extract_source_content(component_dir / component_map)
            sources.component_file = self.get_source_file_name(component_dir / component_map)
            compiled = component_dir / (
                component_map[: -len(COMPONENT_SUFFIX)] + COMPILED_COMPONENT_SUFFIX
            )
            if compiled.is_file():
                try:
                    sources.compiled = compiled.read_text(encoding="utf-8")
                except (OSError, UnicodeDecodeError) as exc:
                    logger.warning("Cannot read compiled output %s: %s", compiled, exc)

        styles_map = _pick_artifact(files, component_dir.name, STYLES_SUFFIX)
        if styles_map:
            sources.styles = self.extract_source_content(component_dir / styles_map)
            sources.styles_file = self.get_source_file_name(component_dir / styles_map)

        return sources


def _pick_artifact(files: list[str], stem: str, suffix: str) -> Optional[str]:
    preferred = f"{stem}{suffix}"
    if preferred in files:
        return preferred
    for name in files:
        if name.endswith(suffix):
            return name
    return None


def has_component_artifacts(directory: Path) -> bool:
    """True when the directory holds a props or component artifact named after itself."""
    name = directory.name
    return (directory / f"{name}{PROPS_SUFFIX}").is_file() or (
        directory / f"{name}{COMPONENT_SUFFIX}"
    ).is_file()


__all__ = [
    "COMPILED_COMPONENT_SUFFIX",
    "COMPONENT_SUFFIX",
    "PROPS_SUFFIX",
    "STYLES_SUFFIX",
    "SourceLocator",
    "has_component_artifacts",
    "load_source_map",
]
