"""Command-line interface for lwg."""

import sys
import logging
import argparse
from pathlib import Path
from typing import Optional
from uuid import UUID

import yaml

logger = logging.getLogger(__name__)

from lwg import __version__
from lwg.config.manager import APP_DIR_NAME, Config, config_home
from lwg.config.validator import validate_config
from lwg.errors import LwgError
from lwg.games.game import Game
from lwg.games.store import GameStore
from lwg.utils import fs


def create_parser() -> argparse.ArgumentParser:
    """Create and configure argument parser."""
    parser = argparse.ArgumentParser(
        prog='lwg',
        description='Manage game launch records and launcher configuration',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Create the configuration directory tree
  lwg init

  # Register a game
  lwg games add --name Doom --exe /games/doom/doom.exe --prefix ~/.wine-doom

  # List registered games
  lwg games list

  # Use a different configuration home (default: $XDG_CONFIG_HOME)
  lwg --config-home /tmp/cfg games list
        """
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {__version__}'
    )

    parser.add_argument(
        '--config-home',
        type=Path,
        metavar='PATH',
        help=f'Configuration home holding the {APP_DIR_NAME}/ directory '
             f'(default: {config_home()})'
    )

    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
        default='WARNING',
        help='Console log level (default: WARNING)'
    )

    parser.add_argument(
        '--log-file',
        type=Path,
        metavar='PATH',
        help='Also write log messages to this file'
    )

    commands = parser.add_subparsers(dest='command', metavar='COMMAND', required=True)

    commands.add_parser('init', help='Create the configuration directory tree')

    config_parser = commands.add_parser('config', help='Inspect the configuration')
    config_commands = config_parser.add_subparsers(dest='config_command', required=True)
    config_commands.add_parser('show', help='Print the current configuration')

    games_parser = commands.add_parser('games', help='Manage games')
    games_commands = games_parser.add_subparsers(dest='games_command', required=True)

    games_commands.add_parser('list', help='List registered games')

    add_parser = games_commands.add_parser('add', help='Register a new game')
    add_parser.add_argument('--name', required=True, help='Display name')
    add_parser.add_argument('--exe', required=True, metavar='PATH', help='Executable path')
    add_parser.add_argument('--prefix', default='', metavar='PATH', help='Wine prefix path')
    add_parser.add_argument('--args', default='', metavar='ARGS', help='Extra launch arguments')
    add_parser.add_argument(
        '--runner-id',
        type=UUID,
        metavar='UUID',
        help='Runner to launch with (default: configured default runner)'
    )

    remove_parser = games_commands.add_parser('remove', help='Remove a game')
    remove_parser.add_argument('game_id', type=UUID, metavar='ID', help='Game id')

    return parser


def _setup_logging(level_str: str, log_file: Optional[Path] = None) -> None:
    """
    Setup logging from command-line options.

    Args:
        level_str: Console log level name
        log_file: Optional log file path (always logs at DEBUG)
    """
    level = getattr(logging, level_str.upper(), logging.WARNING)

    handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
    handlers.append(console_handler)

    if log_file:
        try:
            log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(log_file)
            file_handler.setLevel(logging.DEBUG)
            formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
            file_handler.setFormatter(formatter)
            handlers.append(file_handler)
        except OSError as e:
            print(f"Error: Could not create log file '{log_file}': {e}", file=sys.stderr)
            sys.exit(1)

    logging.basicConfig(
        level=logging.DEBUG if log_file else level,
        handlers=handlers,
        force=True  # Override any existing configuration
    )


def main(argv: Optional[list] = None) -> int:
    """
    Main entry point for the lwg CLI.

    Args:
        argv: Command-line arguments (default: sys.argv)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    _setup_logging(args.log_level, args.log_file)

    try:
        if args.command == 'init':
            return cmd_init(args)
        if args.command == 'config':
            return cmd_config_show(args)
        if args.games_command == 'list':
            return cmd_games_list(args)
        if args.games_command == 'add':
            return cmd_games_add(args)
        return cmd_games_remove(args)
    except LwgError as e:
        logger.debug("Command failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        return 1


def _load_config(args: argparse.Namespace) -> Config:
    home = args.config_home if args.config_home is not None else config_home()
    config = Config.load(home / APP_DIR_NAME)
    validate_config(config)
    return config


def cmd_init(args: argparse.Namespace) -> int:
    config = Config.default(args.config_home)
    if fs.exists(config.config_file):
        print(f"Configuration already exists: {config.config_file}")
        return 0

    validate_config(config)
    config_file = config.save()
    print(f"Created {config_file}")
    return 0


def cmd_config_show(args: argparse.Namespace) -> int:
    config = _load_config(args)
    print(yaml.safe_dump(config.to_dict(), default_flow_style=False, sort_keys=False), end='')
    return 0


def cmd_games_list(args: argparse.Namespace) -> int:
    config = _load_config(args)
    store = GameStore.load(config.paths.games)
    default_runner = config.preferences.runners.default_id

    for game in sorted(store, key=lambda g: g.name.lower()):
        print(f"{game.id}  {game.name}")
        print(f"    executable: {game.executable_path}")
        if game.prefix_path:
            print(f"    prefix:     {game.prefix_path}")
        if game.extra_args:
            print(f"    args:       {game.extra_args}")
        print(f"    runner:     {game.runner_for(default_runner)}")

    if not len(store):
        print("No games registered.")
    return 0


def cmd_games_add(args: argparse.Namespace) -> int:
    config = _load_config(args)
    store = GameStore.load(config.paths.games)

    draft = Game(
        name=args.name,
        executable_path=args.exe,
        prefix_path=args.prefix,
        extra_args=args.args,
    )
    if args.runner_id is not None:
        draft.runner_id = args.runner_id

    game = Game.with_new_id(draft)
    store.add(game, config.paths.games)
    print(game.id)
    return 0


def cmd_games_remove(args: argparse.Namespace) -> int:
    config = _load_config(args)
    store = GameStore.load(config.paths.games)
    store.remove(args.game_id)
    print(f"Removed {args.game_id}")
    return 0


if __name__ == '__main__':
    sys.exit(main())
