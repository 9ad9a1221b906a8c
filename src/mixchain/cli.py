"""CLI interface for mixchain.

Inspect composites from the command line: compose ad-hoc factory lists or
build the composites declared in recipe files.
"""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path

import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape

from . import __version__

_console = None

# Errors raised by recipe loading and reference resolution.
_USER_ERRORS = (ValueError, TypeError, ImportError, AttributeError, FileNotFoundError)


def _print(msg: str = "") -> None:
    """Print with Rich markup support."""
    global _console
    if _console is None:
        _console = Console(highlight=False)
    _console.print(msg)


def _format_chain(cls: type) -> str:
    from .chain import layer_names

    return " -> ".join(layer_names(cls))


def setup_logging(debug: bool = False) -> None:
    """Send mixchain logs through Rich at the configured level."""
    from . import config

    level = logging.DEBUG if debug else config.get_log_level()
    logger = logging.getLogger("mixchain")
    logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in logger.handlers):
        handler = RichHandler(console=Console(stderr=True), show_path=False)
        handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(handler)


def _load_recipes(args):
    from . import config
    from .recipes import load_all_recipes

    paths = [Path(args.file)] if args.file else config.get_recipe_paths()
    if not paths:
        raise ValueError(
            f"No recipe files configured. Pass --file or add 'recipes' to {config.get_config_path()}"
        )
    return load_all_recipes(paths)


def cmd_chain(args):
    """Compose factories given as references and print the chain."""
    from .compose import mix_class, mix_object
    from .recipes import resolve_object

    base = resolve_object(args.base) if args.base else object
    if not isinstance(base, type):
        base = mix_object(base)
    factories = [resolve_object(ref) for ref in args.refs]
    _print(escape(_format_chain(mix_class(base, *factories))))


def cmd_show(args):
    """Build recipes and print their chains."""
    recipes = _load_recipes(args)
    if args.name:
        if args.name not in recipes:
            raise ValueError(f"Unknown composite: {args.name}")
        recipes = {args.name: recipes[args.name]}

    if not recipes:
        _print("No composites defined.")
        return
    for name, recipe in recipes.items():
        _print(f"[bold]{escape(name)}[/bold]: {escape(_format_chain(recipe.build()))}")


def cmd_check(args):
    """Build every recipe and report failures."""
    recipes = _load_recipes(args)
    failed = 0
    for name, recipe in recipes.items():
        try:
            recipe.build()
        except Exception as e:
            failed += 1
            _print(f"[red]FAIL[/red] {escape(name)}: {escape(f'{type(e).__name__}: {e}')}")
        else:
            _print(f"[green]OK[/green]   {escape(name)}")

    _print(f"\n{len(recipes) - failed}/{len(recipes)} composite(s) built.")
    if failed:
        sys.exit(1)


def cmd_config(args):
    """Print the effective configuration."""
    from . import config

    _print(f"# {config.get_config_path()}")
    _print(escape(yaml.dump(config.load_config(), default_flow_style=False, sort_keys=False)))


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="mixchain",
        description="mixchain: compose behavior factories into class chains",
    )
    parser.add_argument("--version", action="version", version=f"mixchain {__version__}")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    parser.add_argument(
        "--app-dir",
        default=".",
        help="Directory added to the import path for references (default: cwd)",
    )

    subparsers = parser.add_subparsers(dest="command")

    # chain
    chain_p = subparsers.add_parser("chain", help="Compose factories and print the chain")
    chain_p.add_argument("refs", nargs="+", help="Factory references (module:attr), outermost first")
    chain_p.add_argument("--base", help="Base class or prototype object reference (default: object)")
    chain_p.set_defaults(func=cmd_chain)

    # show
    show_p = subparsers.add_parser("show", help="Show composites from recipe files")
    show_p.add_argument("name", nargs="?", help="Composite name (default: all)")
    show_p.add_argument("--file", help="Recipe file (default: configured recipes)")
    show_p.set_defaults(func=cmd_show)

    # check
    check_p = subparsers.add_parser("check", help="Build every composite and report failures")
    check_p.add_argument("--file", help="Recipe file (default: configured recipes)")
    check_p.set_defaults(func=cmd_check)

    # config
    config_p = subparsers.add_parser("config", help="Print the effective configuration")
    config_p.set_defaults(func=cmd_config)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    app_dir = os.path.abspath(args.app_dir)
    if app_dir not in sys.path:
        sys.path.insert(0, app_dir)

    try:
        if hasattr(args, "func"):
            args.func(args)
        else:
            parser.print_help()
    except _USER_ERRORS as e:
        _print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except KeyboardInterrupt:
        print()
        sys.exit(130)
