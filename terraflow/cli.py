"""
Terraflow CLI - Command-line interface for the engine.

Usage:
    terraflow play [--players A B C D] [--factions ...] [--seed N]
    terraflow board [--seed N]

The play loop reads one command per line:
    transform <terrain_id> <terrain_type_id>
    build <terrain_id>
    ship
    spade
    upgrade <terrain_id> [structure_type_id]
    cult <track_id>
    pass
    next
    status
    board
    quit
"""

import argparse
import logging
import sys

from .config import TERRAFLOW_DEFAULT_SEED, TERRAFLOW_LOG_LEVEL
from .engine_core.state import STRUCTURE_TYPE_IDS, TERRAIN_TYPE_IDS
from .games.standard.board import create_standard_board, render_board
from .games.standard.cults import CULT_TRACK_IDS
from .games.standard.factions import FACTIONS
from .session import GameFacade
from .games.standard.setup import create_standard_engine, setup_standard_game

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Terraflow - Territory-settlement turn engine",
        prog="terraflow",
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Play command
    play_parser = subparsers.add_parser("play", help="Play a hot-seat game on stdin")
    play_parser.add_argument("--players", nargs="+", help="Player names in seating order")
    play_parser.add_argument(
        "--factions", nargs="+", choices=sorted(FACTIONS), help="One faction per player"
    )
    play_parser.add_argument("--seed", type=int, default=TERRAFLOW_DEFAULT_SEED, help="Shuffle seed")

    # Board command
    board_parser = subparsers.add_parser("board", help="Print the map")
    board_parser.add_argument("--seed", type=int, default=TERRAFLOW_DEFAULT_SEED, help="Shuffle seed")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=TERRAFLOW_LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "play":
        cmd_play(args)
    elif args.command == "board":
        cmd_board(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_board(args):
    """Print the map with terrain ids."""
    print(render_board(create_standard_board(args.seed)))
    print()
    print("Terrain types: " + ", ".join(f"{i}={t.value}" for i, t in TERRAIN_TYPE_IDS.items()))


def cmd_play(args):
    """Run the interactive game loop."""
    try:
        state = setup_standard_game(
            player_names=args.players,
            factions=args.factions,
            seed=args.seed,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    facade = GameFacade(create_standard_engine(state))
    logger.info("Starting game %s", state.game_id)
    print(facade.status)
    _print_help()
    _print_turn(facade)

    for line in sys.stdin:
        words = line.split()
        if not words:
            continue
        if words[0] in ("quit", "exit"):
            break
        try:
            handled = run_command(facade, words)
        except (ValueError, IndexError):
            print("Error: bad arguments, type 'help'")
            continue
        if not handled:
            print(f"Unknown command: {words[0]}")
            continue
        if facade.is_game_over:
            print("Game over.")
            _print_players(facade)
            break
        _print_turn(facade)


def run_command(facade: GameFacade, words: list[str]) -> bool:
    """
    Execute one play-loop command.

    Returns False if the command is unknown. Raises ValueError or
    IndexError on malformed arguments.
    """
    command, args = words[0], [int(w) for w in words[1:]]

    if command == "transform":
        facade.transform_terrain(args[0], args[1])
    elif command == "build":
        facade.build_dwelling(args[0])
    elif command == "ship":
        facade.improve_shipping()
    elif command == "spade":
        facade.improve_terraforming()
    elif command == "upgrade":
        facade.upgrade_structure(args[0], args[1] if len(args) > 1 else None)
    elif command == "cult":
        facade.send_priest_to_cult(args[0])
    elif command == "pass":
        if facade.pass_turn() and not facade.is_game_over:
            facade.next_player()
    elif command == "next":
        facade.next_player()
        return True
    elif command == "status":
        _print_players(facade)
        return True
    elif command == "board":
        print(render_board(facade.state.board))
        return True
    elif command == "help":
        _print_help()
        return True
    else:
        return False

    print(facade.status)
    if facade.last_result:
        for change in facade.last_result.changes:
            print(f"  {change}")
    return True


def _print_turn(facade: GameFacade):
    player = facade.current_player
    phase = "setup" if facade.state.tracker.in_setup else f"round {facade.round_index}"
    print(f"[{phase}] {player.name} ({player.faction.name}) to act")


def _print_players(facade: GameFacade):
    for player in facade.state.players:
        res = player.resources
        print(
            f"{player.name:<12} {player.faction.name:<11} "
            f"W{res.workers} C{res.coins} P{res.priests} Pw{res.power} VP{res.victory_points} "
            f"ship {player.shipping} spade {player.spade_rate}"
            f"{' (passed)' if player.has_passed else ''}"
        )


def _print_help():
    print(__doc__.split("The play loop reads one command per line:")[1].rstrip())
    print("Terrain types: " + ", ".join(f"{i}={t.value}" for i, t in TERRAIN_TYPE_IDS.items()))
    print("Structures: " + ", ".join(f"{i}={s.value}" for i, s in STRUCTURE_TYPE_IDS.items()))
    print("Cult tracks: " + ", ".join(f"{i}={name}" for i, name in CULT_TRACK_IDS.items()))


if __name__ == "__main__":
    main()
