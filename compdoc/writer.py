"""Serialisation of generated documents to disk."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Optional, Sequence

from .logging import get_logger
from .models import Document, documents_to_dicts

logger = get_logger("writer")

PROSE_SUFFIX = ".manual.md"


def save_docs_to_file(docs: Sequence[Document], output_path: Path) -> Path:
    """Write every document into a single JSON array."""
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(json.dumps(documents_to_dicts(docs), indent=2), encoding="utf-8")
    logger.info("Documentation saved to %s", output_path)
    return output_path


def save_prose(name: str, prose: str, output_dir: Path) -> Path:
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    prose_path = output_dir / f"{name}{PROSE_SUFFIX}"
    prose_path.write_text(prose, encoding="utf-8")
    return prose_path


def save_component_doc(
    doc: Document, output_dir: Path, prose: Optional[str] = None
) -> Path:
    """Write ``<name>.json`` and, when prose is given, ``<name>.manual.md`` beside it."""
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{doc.name}.json"
    json_path.write_text(json.dumps(doc.to_dict(), indent=2), encoding="utf-8")
    if prose:
        save_prose(doc.name, prose, output_dir)
    logger.info("Saved %s", json_path.name)
    return json_path


__all__ = ["PROSE_SUFFIX", "save_component_doc", "save_docs_to_file", "save_prose"]
