"""Main CLI entry-point."""
from __future__ import annotations

import argparse
import asyncio
import shutil
import sys

from core.logging.config import bootstrap_logging, shutdown_logging
from config import settings

_BRIGHT_GREEN = "\033[1;92m"
_CYAN = "\033[96m"
_YELLOW = "\033[93m"
_RESET = "\033[0m"
_BOLD = "\033[1m"


def _g(s: str) -> str:
    return f"{_BRIGHT_GREEN}{s}{_RESET}"


def _c(s: str) -> str:
    return f"{_CYAN}{s}{_RESET}"


_LOGO = r"""
  ██████╗  █████╗ ███╗   ██╗    ████████╗██████╗  █████╗  ██████╗██╗  ██╗███████╗██████╗
  ██╔══██╗██╔══██╗████╗  ██║    ╚══██╔══╝██╔══██╗██╔══██╗██╔════╝██║ ██╔╝██╔════╝██╔══██╗
  ██████╔╝███████║██╔██╗ ██║       ██║   ██████╔╝███████║██║     █████╔╝ █████╗  ██████╔╝
  ██╔══██╗██╔══██║██║╚██╗██║       ██║   ██╔══██╗██╔══██║██║     ██╔═██╗ ██╔══╝  ██╔══██╗
  ██████╔╝██║  ██║██║ ╚████║       ██║   ██║  ██║██║  ██║╚██████╗██║  ██╗███████╗██║  ██║
  ╚═════╝ ╚═╝  ╚═╝╚═╝  ╚═══╝       ╚═╝   ╚═╝  ╚═╝╚═╝  ╚═╝ ╚═════╝╚═╝  ╚═╝╚══════╝╚═╝  ╚═╝
"""


def _print_logo() -> None:
    cols = shutil.get_terminal_size(fallback=(100, 20)).columns
    div = "═" * min(cols, 96)
    print(_g(div))
    for line in _LOGO.splitlines():
        print(_g(line))
    print(_c("  Ranked promotion & champion ban tracker"))
    print(_g(div))


def _menu() -> None:
    _print_logo()
    # lazy imports
    from presentation.cli import RefreshCommand, CatchUpCommand, BootstrapCommand, BanCommand, OverviewCommand

    while True:
        cols = shutil.get_terminal_size(fallback=(96, 20)).columns
        print(f"\n{_g('═' * min(cols, 48))}")
        print(f"  {_BOLD}MAIN MENU{_RESET}")
        print(_g("═" * min(cols, 48)))
        print(f"  {_c('1')}  Refresh roster")
        print(f"  {_c('2')}  Catch up backlog")
        print(f"  {_c('3')}  Bootstrap year")
        print(f"  {_c('4')}  Record ban")
        print(f"  {_c('5')}  Player overview")
        print(f"  {_c('6')}  Exit")
        print(_g("─" * min(cols, 48)))
        choice = input("  Choose: ").strip()

        if choice == "1":
            asyncio.run(RefreshCommand().run())
        elif choice == "2":
            asyncio.run(CatchUpCommand().run())
        elif choice == "3":
            asyncio.run(BootstrapCommand().run())
        elif choice == "4":
            asyncio.run(BanCommand().run_interactive())
        elif choice == "5":
            player_id = input("  Player id: ").strip()
            asyncio.run(OverviewCommand().overview(player_id))
        elif choice == "6":
            print(f"\n  {_g('Goodbye!')}\n")
            break
        else:
            print(f"  {_YELLOW}Invalid option.{_RESET}")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="ban-tracker", description="Ranked promotion & champion ban tracker")
    sub = parser.add_subparsers(dest="command")

    refresh = sub.add_parser("refresh", help="run one refresh cycle over the roster")
    refresh.add_argument("--watch", type=float, metavar="SECONDS", help="repeat every SECONDS")
    refresh.add_argument("--catch-up", action="store_true", help="drain the backlog after each cycle")

    sub.add_parser("catch-up", help="work off parked match ids")

    bootstrap = sub.add_parser("bootstrap", help="recount the tracked year")
    bootstrap.add_argument("players", nargs="*", help="player ids (default: all)")
    bootstrap.add_argument("--year", type=int)

    ban = sub.add_parser("ban", help="record a ban for a pending promotion")
    ban.add_argument("player")
    ban.add_argument("champion")
    ban.add_argument("--note", default="")

    overview = sub.add_parser("overview", help="show a player")
    overview.add_argument("player")
    overview.add_argument("--year", type=int)
    overview.add_argument("--json", action="store_true")

    games = sub.add_parser("champ-games", help="year champion counts as JSON")
    games.add_argument("player")
    games.add_argument("--year", type=int)

    mastery = sub.add_parser("mastery", help="top champion masteries (live)")
    mastery.add_argument("player")
    mastery.add_argument("--count", type=int, default=5)

    champions = sub.add_parser("champions", help="list the champion catalog")
    champions.add_argument("--locale")
    return parser


def _dispatch(args: argparse.Namespace) -> int:
    from presentation.cli import RefreshCommand, CatchUpCommand, BootstrapCommand, BanCommand, OverviewCommand

    if args.command == "refresh":
        return asyncio.run(RefreshCommand().run(args.watch, catch_up=args.catch_up))
    if args.command == "catch-up":
        return asyncio.run(CatchUpCommand().run())
    if args.command == "bootstrap":
        return asyncio.run(BootstrapCommand().run(args.players or None, args.year))
    if args.command == "ban":
        return asyncio.run(BanCommand().run(args.player, args.champion, args.note))
    if args.command == "overview":
        return asyncio.run(OverviewCommand().overview(args.player, args.year, as_json=args.json))
    if args.command == "champ-games":
        return asyncio.run(OverviewCommand().champion_games(args.player, args.year))
    if args.command == "mastery":
        return asyncio.run(OverviewCommand().mastery(args.player, args.count))
    if args.command == "champions":
        return asyncio.run(OverviewCommand().champions(args.locale))
    _menu()
    return 0


def main(argv: list[str]) -> int:
    args = _build_parser().parse_args(argv)
    settings.create_directories()
    bootstrap_logging(
        service="tracker",
        level=settings.LOG_LEVEL,
        log_dir=settings.LOG_DIR,
        log_file_name="tracker.jsonl",
    )
    try:
        return _dispatch(args)
    except ValueError as e:
        # configuration problems, e.g. a missing API key
        print(f"  {_YELLOW}{e}{_RESET}")
        return 2
    except KeyboardInterrupt:
        return 130
    finally:
        shutdown_logging()


def cli() -> int:
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(cli())
