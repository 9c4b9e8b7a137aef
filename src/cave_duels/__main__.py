"""Entry point for running Duels de Cave simulations from the command line."""

import argparse
import json
import logging
import random
import sys

from cave_duels.config import get_settings
from cave_duels.content import BossId, CharacterClass, Race
from cave_duels.engine import MatchOrchestrator, format_steps, resolve_seed
from cave_duels.services import CharacterFactory, DungeonRun, Tournament, run_simulation


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cave-duels", description="Duels de Cave combat engine")
    parser.add_argument("--seed", default=None, help="Seed for every random roll")
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    duel = subparsers.add_parser("duel", help="Simulate one duel and print its replay")
    duel.add_argument("--p1-race", choices=[r.value for r in Race])
    duel.add_argument("--p1-class", choices=[c.value for c in CharacterClass])
    duel.add_argument("--p2-race", choices=[r.value for r in Race])
    duel.add_argument("--p2-class", choices=[c.value for c in CharacterClass])
    duel.add_argument("--boss", choices=[b.value for b in BossId], help="Fight a boss instead of a second player")
    duel.add_argument("--level", type=int, default=1)
    duel.add_argument("--json", action="store_true", help="Print the replay payload as JSON")

    simulate = subparsers.add_parser("simulate", help="Run a balance simulation")
    simulate.add_argument("--combats", type=int, default=None)
    simulate.add_argument("--level", type=int, default=1)

    tournament = subparsers.add_parser("tournament", help="Run a single-elimination tournament")
    tournament.add_argument("--players", type=int, default=8)
    tournament.add_argument("--level", type=int, default=1)

    dungeon = subparsers.add_parser("dungeon", help="Run a character through the dungeon")
    dungeon.add_argument("--race", choices=[r.value for r in Race])
    dungeon.add_argument("--class", dest="character_class", choices=[c.value for c in CharacterClass])
    dungeon.add_argument("--level", type=int, default=1)

    return parser


def run_duel(args: argparse.Namespace, seed: str) -> None:
    factory = CharacterFactory(random.Random(f"{seed}:characters"))
    p1 = factory.create(
        "Joueur 1",
        Race(args.p1_race) if args.p1_race else None,
        CharacterClass(args.p1_class) if args.p1_class else None,
        level=args.level,
    )
    if args.boss:
        p2 = CharacterFactory.create_boss(args.boss)
    else:
        p2 = factory.create(
            "Joueur 2",
            Race(args.p2_race) if args.p2_race else None,
            CharacterClass(args.p2_class) if args.p2_class else None,
            level=args.level,
        )

    result = MatchOrchestrator().simulate(p1, p2, random.Random(seed))
    if args.json:
        print(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        print(format_steps(result.steps))


def run_tournament(args: argparse.Namespace, seed: str) -> None:
    factory = CharacterFactory(random.Random(f"{seed}:characters"))
    records = [factory.create(f"Combattant {i + 1}", level=args.level) for i in range(args.players)]
    result = Tournament(records, seed=seed).run()
    for match in result.played():
        print(f"{match.id}: {match.p1.name} vs {match.p2.name} -> {match.winner.name} ({match.result.turns} tours)")
    print(f"🏆 Champion: {result.champion.name} ({result.champion.race.value} {result.champion.character_class.value})")


def run_dungeon(args: argparse.Namespace, seed: str) -> None:
    factory = CharacterFactory(random.Random(f"{seed}:characters"))
    player = factory.create(
        "Aventurier",
        Race(args.race) if args.race else None,
        CharacterClass(args.character_class) if args.character_class else None,
        level=args.level,
    )
    result = DungeonRun(player, seed=seed).run()
    for match in result.results:
        print(f"{player.name} vs {match.loser_name if match.winner_side == 1 else match.winner_name}: "
              f"{'victoire' if match.winner_side == 1 else 'défaite'} en {match.turns} tours")
    for weapon in result.rewards:
        print(f"Butin: {weapon.name} ({weapon.rarity.value})")
    print(f"Niveaux terminés: {result.levels_cleared}")


def main(argv: list[str] | None = None) -> int:
    """Run the command-line interface."""
    settings = get_settings()
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == "tournament" and args.players < 2:
        parser.error("--players must be at least 2")
    if args.command == "simulate" and args.combats is not None and args.combats < 1:
        parser.error("--combats must be at least 1")

    logging.basicConfig(
        level=logging.DEBUG if settings.debug or args.debug else logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    seed = str(resolve_seed(args.seed if args.seed is not None else settings.default_seed))
    logging.debug("Using seed %s", seed)

    match args.command:
        case "duel":
            run_duel(args, seed)
        case "simulate":
            report = run_simulation(args.combats or settings.simulation_combats, level=args.level, seed=seed)
            print(report.format_table())
        case "tournament":
            run_tournament(args, seed)
        case "dungeon":
            run_dungeon(args, seed)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        sys.exit(0)
