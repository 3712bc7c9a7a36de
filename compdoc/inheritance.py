"""Resolution of inherited properties along a single base-type chain."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import InheritanceConfig, ParserConfig
from .errors import UnresolvedAncestor
from .extraction.props import extract_props
from .extraction.source_map import PROPS_SUFFIX, SourceLocator
from .extraction.syntax import grammar_for_file
from .logging import get_logger
from .models import PropertyDescriptor

logger = get_logger("inheritance")

StemStrategy = Callable[[str, Sequence[str]], Optional[str]]

_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")
_SKIPPED_DIRS = {"node_modules"}


def camel_to_kebab(name: str) -> str:
    return _CAMEL_BOUNDARY.sub("-", name).lower()


def strip_prefix(name: str, prefixes: Sequence[str]) -> Optional[str]:
    """Return ``name`` without the first matching prefix, or None when none applies."""
    for prefix in prefixes:
        if prefix and name.startswith(prefix) and len(name) > len(prefix):
            return name[len(prefix) :]
    return None


def lowercase_stem(name: str, prefixes: Sequence[str]) -> Optional[str]:
    return name.lower()


def kebab_stem(name: str, prefixes: Sequence[str]) -> Optional[str]:
    return camel_to_kebab(name)


def unprefixed_lowercase_stem(name: str, prefixes: Sequence[str]) -> Optional[str]:
    stripped = strip_prefix(name, prefixes)
    return stripped.lower() if stripped else None


def unprefixed_kebab_stem(name: str, prefixes: Sequence[str]) -> Optional[str]:
    stripped = strip_prefix(name, prefixes)
    return camel_to_kebab(stripped) if stripped else None


STEM_STRATEGIES: Tuple[StemStrategy, ...] = (
    lowercase_stem,
    kebab_stem,
    unprefixed_lowercase_stem,
    unprefixed_kebab_stem,
)


def candidate_stems(
    type_name: str,
    prefixes: Sequence[str] = ("Wm",),
    suffix: str = "Props",
    strategies: Sequence[StemStrategy] = STEM_STRATEGIES,
) -> List[str]:
    """Ordered, de-duplicated file stems that may hold ``type_name``'s declaration."""
    base = type_name
    if suffix and base.endswith(suffix) and len(base) > len(suffix):
        base = base[: -len(suffix)]
    stems: List[str] = []
    for strategy in strategies:
        stem = strategy(base, prefixes)
        if stem and stem not in stems:
            stems.append(stem)
    return stems


class RootPropsCache:
    """Lazily parsed property list of the root base type, scoped to one run."""

    def __init__(
        self,
        library_path: Path,
        inheritance: InheritanceConfig,
        locator: SourceLocator | None = None,
        parser: ParserConfig | None = None,
    ) -> None:
        self.library_path = Path(library_path)
        self.inheritance = inheritance
        self.locator = locator or SourceLocator()
        self.parser = parser or ParserConfig()
        self._props: Optional[Tuple[PropertyDescriptor, ...]] = None

    @classmethod
    def from_props(
        cls, inheritance: InheritanceConfig, props: Iterable[PropertyDescriptor]
    ) -> "RootPropsCache":
        cache = cls(Path("."), inheritance)
        cache._props = tuple(props)
        return cache

    @property
    def root_type(self) -> str:
        return self.inheritance.root_type

    @property
    def loaded(self) -> bool:
        return self._props is not None

    def get(self) -> Tuple[PropertyDescriptor, ...]:
        if self._props is None:
            self._props = self._load()
        return self._props

    def _load(self) -> Tuple[PropertyDescriptor, ...]:
        artifact = self.library_path / self.inheritance.root_artifact
        source = self.locator.extract_source_content(artifact)
        if source is None:
            return ()
        bag = extract_props(
            source,
            type_name=self.root_type,
            grammar=grammar_for_file(self.locator.get_source_file_name(artifact)),
            type_suffix=self.inheritance.type_suffix,
            default_props_names=self.parser.default_props_names,
        )
        if bag is None or bag.class_name != self.root_type:
            logger.warning("Root type %s not declared in %s", self.root_type, artifact)
            return ()
        logger.debug("Loaded %d root properties from %s", len(bag.props), artifact)
        return tuple(bag.props)


class InheritanceResolver:
    """Walks a props declaration's base types and collects inherited properties."""

    def __init__(
        self,
        library_path: Path,
        inheritance: InheritanceConfig,
        root_cache: RootPropsCache,
        locator: SourceLocator | None = None,
        parser: ParserConfig | None = None,
    ) -> None:
        self.library_path = Path(library_path)
        self.inheritance = inheritance
        self.root_cache = root_cache
        self.locator = locator or SourceLocator()
        self.parser = parser or ParserConfig()
        self._index: Dict[str, Dict[str, List[Path]]] = {}

    def resolve(self, base_class: Optional[str]) -> List[PropertyDescriptor]:
        """Return inherited properties, nearest ancestor first.

        Resolution stops at the root type, at the first name that maps to no
        artifact, or at a type name already visited on this chain.
        """
        inherited: List[PropertyDescriptor] = []
        visited: set[str] = set()
        type_name = base_class
        while type_name:
            if type_name in visited:
                logger.warning("Inheritance cycle at %s; chain truncated", type_name)
                break
            visited.add(type_name)

            if type_name == self.inheritance.root_type:
                inherited.extend(prop.as_inherited(type_name) for prop in self.root_cache.get())
                break

            try:
                artifact = self.find_props_artifact(type_name)
            except UnresolvedAncestor as exc:
                logger.warning("%s", exc)
                break

            source = self.locator.extract_source_content(artifact)
            if source is None:
                break
            bag = extract_props(
                source,
                type_name=type_name,
                grammar=grammar_for_file(self.locator.get_source_file_name(artifact)),
                type_suffix=self.inheritance.type_suffix,
                default_props_names=self.parser.default_props_names,
            )
            if bag is None:
                logger.debug("No props declaration for %s in %s", type_name, artifact)
                break
            inherited.extend(prop.as_inherited(type_name) for prop in bag.props)
            type_name = bag.base_class
        return inherited

    def find_props_artifact(self, type_name: str) -> Path:
        """Locate the props artifact declaring ``type_name``; raises UnresolvedAncestor."""
        stems = candidate_stems(
            type_name, self.inheritance.type_prefixes, self.inheritance.type_suffix
        )
        for stem in stems:
            file_name = f"{stem}{PROPS_SUFFIX}"
            for search_root in self.inheritance.search_roots:
                matches = self._artifacts_under(search_root).get(file_name)
                if matches:
                    logger.debug("Resolved %s to %s", type_name, matches[0])
                    return matches[0]
        raise UnresolvedAncestor(type_name, tuple(stems))

    def _artifacts_under(self, search_root: str) -> Dict[str, List[Path]]:
        index = self._index.get(search_root)
        if index is None:
            index = {}
            root = self.library_path / search_root
            if root.is_dir():
                for path in sorted(root.rglob(f"*{PROPS_SUFFIX}")):
                    relative_parts = path.relative_to(root).parts[:-1]
                    if any(part.startswith(".") or part in _SKIPPED_DIRS for part in relative_parts):
                        continue
                    index.setdefault(path.name, []).append(path)
            self._index[search_root] = index
        return index


def merge_props(
    own: Iterable[PropertyDescriptor], inherited: Iterable[PropertyDescriptor]
) -> List[PropertyDescriptor]:
    """Own properties first; inherited ones whose name is already present are dropped."""
    merged: List[PropertyDescriptor] = []
    seen: set[str] = set()
    for prop in list(own) + list(inherited):
        if prop.name in seen:
            continue
        seen.add(prop.name)
        merged.append(prop)
    return merged


__all__ = [
    "STEM_STRATEGIES",
    "InheritanceResolver",
    "RootPropsCache",
    "camel_to_kebab",
    "candidate_stems",
    "merge_props",
]
