#!/usr/bin/env python3
"""Generate random battle teams and print them in Showdown paste format.

Usage:
    # Random battle team from JSON data dumps
    python scripts/generate_team.py --data-dir data/gen9

    # Battle Factory team with a fixed seed
    python scripts/generate_team.py --data-dir data/gen9 --team-kind randomFactory --seed 1 2 3 4

    # Several Challenge Cup teams using poke-env's bundled data
    python scripts/generate_team.py --team-kind randomCC --count 3
"""

import argparse
import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from randbats.config import generator_config
from randbats.errors import TeamGenerationError
from randbats.shared.data_loader import Dex, SetsRepository
from randbats.shared.formats import Format
from randbats.shared.prng import PRNG
from randbats.teambuilder.dispatch import create_generator
from randbats.teambuilder.team_repr import team_to_showdown_paste

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(message)s",
    datefmt="%H:%M:%S",
)
logger = logging.getLogger(__name__)


def load_data(data_dir: str | None, gen: int) -> tuple[Dex, SetsRepository]:
    """Load the dex and set catalogs, from JSON dumps if a directory is given."""
    if data_dir and Path(data_dir).is_dir():
        return Dex.from_json_dir(data_dir), SetsRepository.from_json_dir(data_dir)
    logger.info(f"No data directory at {data_dir}, using poke-env data without set catalogs")
    return Dex.from_poke_env(gen), SetsRepository()


def main() -> None:
    """Entry point."""
    parser = argparse.ArgumentParser(
        description="Generate random battle teams",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument(
        "--data-dir", "-d",
        type=str,
        default=generator_config.data_dir,
        help="Directory of Showdown JSON data and set catalogs",
    )
    parser.add_argument(
        "--format", "-f",
        type=str,
        default="gen9randombattle",
        help="Format id",
    )
    parser.add_argument(
        "--team-kind", "-t",
        type=str,
        default="random",
        help="Generator to use (random, randomFactory, randomBSSFactory, randomCC, randomHC, randomCAP1v1)",
    )
    parser.add_argument("--gen", type=int, default=9, help="Generation")
    parser.add_argument("--team-size", type=int, default=6, help="Pokemon per team")
    parser.add_argument("--level", type=int, default=None, help="Force every Pokemon to this level")
    parser.add_argument("--monotype", type=str, default=None, help="Force a single type")
    parser.add_argument(
        "--seed",
        type=int,
        nargs="+",
        default=None,
        help="PRNG seed (one or more integers)",
    )
    parser.add_argument("--count", "-n", type=int, default=1, help="Number of teams")
    args = parser.parse_args()

    format = Format(
        id=args.format,
        team=args.team_kind,
        gen=args.gen,
        max_team_size=args.team_size,
        adjust_level=args.level,
        force_monotype=args.monotype,
    )
    dex, sets = load_data(args.data_dir, args.gen)

    seed = None
    if args.seed:
        seed = args.seed[0] if len(args.seed) == 1 else tuple(args.seed)
    prng = PRNG(seed)
    logger.info(f"Seed: {prng.seed}")

    generator = create_generator(format, dex, sets=sets, prng=prng)
    for i in range(args.count):
        try:
            team = generator.get_team()
        except TeamGenerationError as e:
            print(f"Error: {e}")
            sys.exit(1)
        print(f"=== Team {i + 1} ===")
        print(team_to_showdown_paste(team, dex))


if __name__ == "__main__":
    main()
