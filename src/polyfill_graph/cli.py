"""polyfill-graph CLI: generate polyfill size estimation data."""

import argparse
import sys
from importlib.metadata import version as get_version, PackageNotFoundError
from pathlib import Path
from typing import List, Optional


_COMMANDS = ("build", "hash")


def _build_parser() -> argparse.ArgumentParser:
    try:
        package_version = get_version("polyfill-graph")
    except PackageNotFoundError:
        package_version = "dev"

    parser = argparse.ArgumentParser(
        prog="polyfill-graph",
        description="Generate the module graph used to estimate legacy polyfill bundle weight"
    )
    parser.add_argument("--version", action="version", version=f"polyfill-graph {package_version}")
    # Common arguments
    parent_parser = argparse.ArgumentParser(add_help=False)
    parent_parser.add_argument(
        "--root",
        type=Path,
        default=Path("."),
        help="Scripts directory holding yarn.lock, run.js, main.js and variants/ (defaults to '.')"
    )
    parent_parser.add_argument(
        "--quiet",
        action="store_true",
        help="Suppress all non-error output."
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    build_parser = subparsers.add_parser(
        "build",
        help="Build polyfill-graph-data.json from the variant bundles (default command)",
        parents=[parent_parser]
    )
    build_parser.add_argument(
        "--out",
        type=Path,
        default=None,
        help="Output file (defaults to <root>/polyfill-graph-data.json)"
    )

    subparsers.add_parser(
        "hash",
        help="Print the build-variant cache key",
        parents=[parent_parser]
    )
    return parser


def main(argv: Optional[List[str]] = None):
    """Main CLI entry point. Runs `build` when no command is given."""
    parser = _build_parser()
    argv = list(sys.argv[1:] if argv is None else argv)
    command = next((arg for arg in argv if arg in _COMMANDS), None)
    if command is not None:
        # Options may precede the command; the subparsers own them.
        argv.remove(command)
        argv.insert(0, command)
    elif not any(arg in ("-h", "--help", "--version") for arg in argv):
        argv.insert(0, "build")
    args = parser.parse_args(argv)

    if args.command == "hash":
        try:
            from .api import compute_variant_hash
            from ._internal.io.variants import VariantPaths

            print(compute_variant_hash(VariantPaths(root=args.root)))
            sys.exit(0)
        except OSError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    elif args.command == "build":
        try:
            from .api import generate_polyfill_graph

            result = generate_polyfill_graph(args.root, output=args.out)

            for issue in result.warnings:
                print(f"Warning [{issue.code.value}]: {issue.message}", file=sys.stderr)

            if not args.quiet:
                print("[OK] Polyfill graph generated")
                print(f"  Variant hash: {result.variant_hash}")
                print(f"  Output: {result.output_path}")
                print(f"  Polyfills: {len(result.data.dependencies)}")
                print(f"  Modules: {len(result.data.module_sizes)}")
                print(f"  Base size: {result.data.base_size} bytes")
                print(f"  Max size: {result.data.max_size} bytes")
            sys.exit(0)
        except FileNotFoundError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except ValueError as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"Unexpected error: {e}", file=sys.stderr)
            import traceback
            traceback.print_exc()
            sys.exit(1)


if __name__ == "__main__":
    main()
