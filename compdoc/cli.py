"""CLI entrypoints for compdoc commands."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Dict, List, Sequence

from .config import ConfigError, GeneratorConfig, load_config
from .docs_fetcher import DocsFetcher
from .generator import DocumentationGenerator
from .logging import configure_logging
from .models import ComponentCandidate, Document
from .writer import save_component_doc, save_docs_to_file, save_prose

DEFAULT_LIBRARY_PATH = "node_modules/@wavemaker/app-rn-runtime"
DEFAULT_OUTPUT_DIR = "output"
SINGLE_FILE_NAME = "all-components.json"


def _add_verbose_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    kwargs: dict[str, object] = {
        "action": "store_true",
        "help": "Increase log verbosity for troubleshooting.",
    }
    if suppress_default:
        kwargs["default"] = argparse.SUPPRESS
    else:
        kwargs["default"] = False
    parser.add_argument(
        "-v",
        "--verbose",
        **kwargs,
    )


def _add_log_file_option(
    parser: argparse.ArgumentParser, *, suppress_default: bool = False
) -> None:
    parser.add_argument(
        "--log-file",
        type=Path,
        default=argparse.SUPPRESS if suppress_default else None,
        help="Also write DEBUG logs to this file.",
    )


def _add_library_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "-l",
        "--library",
        default=DEFAULT_LIBRARY_PATH,
        help=f"Path to the component library build (defaults to {DEFAULT_LIBRARY_PATH}).",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="Path to a .compdoc.yml file or the directory holding it.",
    )


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="compdoc",
        description="Extract component metadata from compiled UI component libraries.",
    )
    _add_verbose_option(parser)
    _add_log_file_option(parser)
    subparsers = parser.add_subparsers(dest="command", required=True)

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate component documentation JSON.",
    )
    _add_verbose_option(generate_parser, suppress_default=True)
    _add_log_file_option(generate_parser, suppress_default=True)
    _add_library_options(generate_parser)
    target = generate_parser.add_mutually_exclusive_group(required=True)
    target.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Generate docs for all components.",
    )
    target.add_argument(
        "-c",
        "--component",
        help="Generate docs for a single component by name.",
    )
    generate_parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory (defaults to ./{DEFAULT_OUTPUT_DIR}).",
    )
    generate_parser.add_argument(
        "--single-file",
        action="store_true",
        help=f"Write every component into {SINGLE_FILE_NAME} instead of one file each.",
    )
    generate_parser.add_argument(
        "--fetch-docs",
        action="store_true",
        help="Fetch existing prose documentation and save it next to each component.",
    )

    list_parser = subparsers.add_parser(
        "list",
        help="List the components found in a library.",
    )
    _add_verbose_option(list_parser, suppress_default=True)
    _add_log_file_option(list_parser, suppress_default=True)
    _add_library_options(list_parser)

    return parser


def main(argv: list[str] | None = None) -> None:
    """CLI entrypoint for compdoc commands."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    configure_logging(verbose=bool(args.verbose), log_file=args.log_file)

    library_path = Path(args.library).expanduser().resolve()
    if not library_path.is_dir():
        parser.exit(1, f"Library path not found: {library_path}\n")

    config_path = Path(args.config) if args.config else Path.cwd()
    try:
        config = load_config(config_path)
    except ConfigError as exc:
        parser.exit(1, f"{exc}\n")

    generator = DocumentationGenerator(library_path, config)

    if args.command == "generate":
        _run_generate(parser, args, generator, config)
    elif args.command == "list":
        _run_list(generator)
    else:  # pragma: no cover - argparse enforces choices
        parser.exit(1, "Unknown command\n")


def _run_generate(
    parser: argparse.ArgumentParser,
    args: argparse.Namespace,
    generator: DocumentationGenerator,
    config: GeneratorConfig,
) -> None:
    output_dir = Path(args.output).expanduser().resolve()

    docs: List[Document]
    if args.all:
        docs = generator.generate_all_docs()
    else:
        candidates = generator.find_all_components()
        wanted = args.component.lower()
        candidate = next((item for item in candidates if item.name.lower() == wanted), None)
        if candidate is None:
            available = "\n".join(f"  - {item.name} ({item.category})" for item in candidates)
            parser.exit(
                1,
                f"Component '{args.component}' not found\n\nAvailable components:\n{available}\n",
            )
        doc = generator.generate_doc(candidate)
        if doc is None:
            parser.exit(1, "Failed to generate documentation\nRun with --verbose for more details.\n")
        docs = [doc]

    if args.single_file:
        output_file = save_docs_to_file(docs, output_dir / SINGLE_FILE_NAME)
        print(f"Documentation saved to {_relativize(output_file)}")
    else:
        for doc in docs:
            save_component_doc(doc, output_dir)
        print(f"Generated documentation for {len(docs)} components in {_relativize(output_dir)}")

    if args.fetch_docs:
        _save_fetched_prose(config, docs, output_dir)


def _save_fetched_prose(
    config: GeneratorConfig, docs: Sequence[Document], output_dir: Path
) -> None:
    fetcher = DocsFetcher(config.docs.base_url, config.docs.path_mapping)
    prose = fetcher.fetch_many([doc.name for doc in docs])
    for name, text in prose.items():
        save_prose(name, text, output_dir)
    print(f"Saved prose documentation for {len(prose)} of {len(docs)} components")


def _run_list(generator: DocumentationGenerator) -> None:
    components = generator.find_all_components()
    print(f"Found {len(components)} components:\n")
    for category, names in _group_by_category(components).items():
        print(f"{category}/ ({len(names)})")
        for name in names:
            print(f"  - {name}")
        print("")


def _group_by_category(components: Sequence[ComponentCandidate]) -> Dict[str, List[str]]:
    grouped: Dict[str, List[str]] = {}
    for item in components:
        grouped.setdefault(item.category, []).append(item.name)
    return grouped


def _relativize(path: Path) -> str:
    try:
        return str(path.relative_to(Path.cwd()))
    except ValueError:
        return str(path)


if __name__ == "__main__":
    main(sys.argv[1:])
