"""dependency-resolver CLI entry point.

Usage: uv run dependency-resolver [command]

Input is a JSON object mapping each name to the names it depends on:

    {"app": ["lib", "log"], "lib": ["log"], "log": []}

Names that only show up as dependencies are treated as having none.
"""
import argparse
import json
import logging
import sys

from dependency_resolver.graph.topological import CyclicDependencyError
from dependency_resolver.resolver import Resolver, Strategy

EXIT_CYCLE = 1
EXIT_BAD_INPUT = 2


def _add_input_argument(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "file",
        help="JSON file mapping each name to its dependencies ('-' for stdin)",
    )


def _add_resolve_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "resolve",
        help="Print names in dependency order, dependencies first.",
    )
    _add_input_argument(p)
    p.add_argument(
        "--strategy", choices=[s.name.lower() for s in Strategy], default="merge",
        help="Ordering strategy (default: merge)",
    )
    p.add_argument(
        "--json", action="store_true",
        help="Print the order as a JSON array instead of one name per line.",
    )


def _add_check_parser(subparsers: argparse._SubParsersAction) -> None:
    p = subparsers.add_parser(
        "check",
        help="Report whether the dependency map contains a cycle.",
    )
    _add_input_argument(p)


def load_dependency_map(path: str) -> dict[str, list[str]]:
    """Read and validate a name -> dependencies mapping.

    Raises ValueError on anything that is not a JSON object of string
    lists.
    """
    if path == "-":
        data = json.load(sys.stdin)
    else:
        with open(path, encoding="utf-8") as fh:
            data = json.load(fh)

    if not isinstance(data, dict):
        raise ValueError("top-level JSON value must be an object")
    for name, deps in data.items():
        if not isinstance(deps, list) or not all(isinstance(d, str) for d in deps):
            raise ValueError(f"dependencies of {name!r} must be a list of strings")
    return data


def build_resolver(
    dep_map: dict[str, list[str]], strategy: Strategy = Strategy.MERGE
) -> Resolver[str]:
    resolver: Resolver[str] = Resolver(lambda name: dep_map.get(name, []), strategy)
    resolver.register_all(dep_map)
    return resolver


def _run_resolve(args: argparse.Namespace, dep_map: dict[str, list[str]]) -> int:
    resolver = build_resolver(dep_map, Strategy[args.strategy.upper()])
    try:
        order = resolver.resolve()
    except CyclicDependencyError as exc:
        print(f"error: {exc}", file=sys.stderr)
        return EXIT_CYCLE

    if args.json:
        print(json.dumps(order))
    else:
        for name in order:
            print(name)
    return 0


def _run_check(dep_map: dict[str, list[str]]) -> int:
    result = build_resolver(dep_map).find_cycle()
    if result.has_cycle:
        print("cycle: " + " -> ".join(result.cycle_path or []))
        return EXIT_CYCLE
    print("no cycles")
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="dependency-resolver",
        description="Order named entities so dependencies come first.",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging on stderr.",
    )
    subparsers = parser.add_subparsers(dest="command")

    _add_resolve_parser(subparsers)
    _add_check_parser(subparsers)

    args = parser.parse_args(argv)
    if args.command is None:
        parser.print_help()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        dep_map = load_dependency_map(args.file)
    except (OSError, ValueError) as exc:
        # json.JSONDecodeError is a ValueError
        print(f"error: {args.file}: {exc}", file=sys.stderr)
        return EXIT_BAD_INPUT

    if args.command == "resolve":
        return _run_resolve(args, dep_map)
    return _run_check(dep_map)


if __name__ == "__main__":
    sys.exit(main())
