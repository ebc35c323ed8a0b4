"""Command-line interface for building ideal teams from rating ledgers."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from idealxi.config import get_preset, normalize_position
from idealxi.config_loader import SelectionProfile, default_recent_window
from idealxi.export import ideal_team_to_csv
from idealxi.ingest import load_formation_json, load_players_from_csv
from idealxi.models import Formation, Player
from idealxi.selector import generate_ideal_team
from idealxi.stats import most_used_cards, player_position_summary, position_ranking


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Rate player cards and pick an ideal XI")
    parser.add_argument("--verbose", action="store_true", help="Log each slot assignment")
    sub = parser.add_subparsers(dest="command", required=True)

    team_cmd = sub.add_parser("team", help="Pick starters and substitutes for a formation")
    team_cmd.add_argument("ratings", type=Path, help="Path to the ratings ledger CSV")
    source = team_cmd.add_mutually_exclusive_group(required=True)
    source.add_argument("--preset", help="Formation preset name (e.g., 4-3-3)")
    source.add_argument("--formation", type=Path, help="Formation JSON document")
    team_cmd.add_argument(
        "--discard",
        nargs="*",
        default=None,
        help="Card IDs to remove from consideration",
    )
    team_cmd.add_argument(
        "--recent-window",
        type=int,
        default=None,
        help="Number of latest ratings used for hot-streak detection",
    )
    team_cmd.add_argument("--output", type=Path, default=None, help="Output CSV path (stdout if omitted)")
    team_cmd.add_argument("--load-profile", type=Path, help="Load selection profile JSON", default=None)
    team_cmd.add_argument("--save-profile", type=Path, help="Save selection profile JSON", default=None)

    stats_cmd = sub.add_parser("stats", help="Show per-position performance for players")
    stats_cmd.add_argument("ratings", type=Path, help="Path to the ratings ledger CSV")
    stats_cmd.add_argument("--player", help="Only show the player with this name", default=None)
    stats_cmd.add_argument(
        "--position",
        default=None,
        help="Rank every card rated at this position (--player then filters by name substring)",
    )

    serve_cmd = sub.add_parser("serve", help="Run the REST API")
    serve_cmd.add_argument("--host", default="127.0.0.1")
    serve_cmd.add_argument("--port", type=int, default=8000)
    return parser.parse_args(argv)


def _resolve_formation(args: argparse.Namespace) -> Formation:
    if args.formation:
        try:
            return load_formation_json(args.formation)
        except ValueError as exc:
            raise SystemExit(f"{args.formation}: {exc}") from exc
    try:
        preset = get_preset(args.preset)
    except KeyError as exc:
        raise SystemExit(str(exc)) from exc
    return Formation(formation_id=preset.name, name=preset.name, slots=preset.slots())


def run_team(args: argparse.Namespace) -> int:
    profile = SelectionProfile(recent_window=default_recent_window())
    if args.load_profile:
        profile = SelectionProfile.load(args.load_profile)
    if args.discard is not None:
        profile.discarded_card_ids = list(dict.fromkeys(profile.discarded_card_ids + args.discard))
    if args.recent_window is not None:
        profile.recent_window = max(1, args.recent_window)

    players, report = load_players_from_csv(args.ratings)
    print(f"Loaded {report.imported_ratings}/{report.total_rows} ratings for {report.players} players")
    if report.skipped_rows:
        preview = ", ".join(report.skipped_rows[:5])
        more = len(report.skipped_rows) - 5
        suffix = f", +{more} more" if more > 0 else ""
        print(f"Skipped rows: {preview}{suffix}")

    formation = _resolve_formation(args)
    team = generate_ideal_team(
        players,
        formation,
        profile.discarded_card_ids,
        recent_window=profile.recent_window,
    )

    if args.save_profile:
        profile.save(args.save_profile)
        print(f"Saved selection profile to {args.save_profile}")

    payload = ideal_team_to_csv(team)
    if args.output:
        args.output.write_text(payload, encoding="utf-8")
        print(f"Wrote {formation.name} team to {args.output}")
    else:
        print(payload, end="")

    vacancies = sum(
        1 for slot in team for assigned in (slot.starter, slot.substitute) if assigned.is_placeholder
    )
    if vacancies:
        print(f"Vacant assignments: {vacancies}")
    return 0


def _print_position_ranking(players: list[Player], position: str, search: str | None) -> int:
    try:
        code = normalize_position(position)
    except ValueError as exc:
        raise SystemExit(str(exc)) from exc

    ranking = position_ranking(players, code, search)
    print(f"{code}: {len(ranking)} cards")
    for rank, entry in enumerate(ranking, start=1):
        print(
            f"  {rank:>2}. {entry.player_name} / {entry.card_name} [{entry.style}]"
            f" {entry.average:.1f} ({entry.matches} matches)"
        )
    return 0


def run_stats(args: argparse.Namespace) -> int:
    players, _ = load_players_from_csv(args.ratings)
    if args.position:
        return _print_position_ranking(players, args.position, args.player)
    if args.player:
        key = args.player.strip().lower()
        players = [player for player in players if player.name.strip().lower() == key]
        if not players:
            raise SystemExit(f"player {args.player!r} not found")

    for player in players:
        print(player.name)
        for entry in player_position_summary(player):
            print(f"  {entry.position:<4} {entry.average:.1f} ({entry.matches} matches)")
        top_cards = most_used_cards(player)
        if top_cards:
            names = ", ".join(f"{card.name} [{card.matches}]" for card in top_cards)
            print(f"  cards: {names}")
    return 0


def run_serve(args: argparse.Namespace) -> int:
    import uvicorn

    from idealxi.api import create_app

    uvicorn.run(create_app(), host=args.host, port=args.port)
    return 0


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.command == "team":
        return run_team(args)
    if args.command == "stats":
        return run_stats(args)
    return run_serve(args)


if __name__ == "__main__":
    raise SystemExit(main())
