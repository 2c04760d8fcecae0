"""cavecrawl CLI entry point.

Generates cave maps from the command line. Parameters come from flags, from
``CAVE_*`` environment variables (optionally loaded from a .env file) or from
the built-in defaults, in that order of precedence.

Run `python run.py --help` for details.
"""

import argparse
import json
import sys
from textwrap import dedent

from colorama import Fore, Style
from colorama import init as _color_init
from dotenv import load_dotenv

from cavecrawl import __version__
from cavecrawl.cave import CaveGenerator, GenerationParameters, SEED_MODE_FIXED
from cavecrawl.cave.catalog import STARTER_ENEMIES, STARTER_ITEMS
from cavecrawl.config import parameters_from_env
from cavecrawl.errors import CaveError
from cavecrawl.logging_utils import configure, log

GLYPH_COLORS = {
    "#": Fore.WHITE,
    "X": Fore.BLUE,
    "S": Fore.GREEN + Style.BRIGHT,
    "G": Fore.RED + Style.BRIGHT,
    "$": Fore.YELLOW,
    "k": Fore.MAGENTA + Style.BRIGHT,
    ".": Style.DIM,
}


def colorize(ascii_map: str) -> str:
    out = []
    for ch in ascii_map:
        color = GLYPH_COLORS.get(ch)
        out.append(f"{color}{ch}{Style.RESET_ALL}" if color else ch)
    return "".join(out)


def parse_args(argv: list[str]) -> argparse.Namespace:
    description = """
    cavecrawl cave generator

    Build one cave map and print it as ASCII (top row first) or JSON. Maps are
    generated in fixed seed mode so the same seed always prints the same cave.
    """

    epilog = dedent(
        """
        Environment variables:
          CAVE_<FIELD>          Any generation parameter, e.g. CAVE_WIDTH=64
          CAVECRAWL_LOG_LEVEL   debug | info | warn | error (default: info)
          CAVECRAWL_LOG_JSON    Emit log records as JSON when truthy

        Examples:
          # Preview the default 50x50 cave for seed 1234
          python run.py preview

          # A wider map for a specific seed, as JSON
          python run.py preview --seed 42 --width 80 --height 40 --json

          # Load CAVE_* variables from .env, then preview
          python run.py --env-file .env preview --from-env

        Legend:
          .  floor      #  wall (breakable)   X  bedrock
          S  start      G  goal               k  key / item
          $  treasure
        """
    )

    parser = argparse.ArgumentParser(
        prog="cavecrawl",
        description=dedent(description),
        epilog=epilog,
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "--env-file",
        dest="env_file",
        help="Path to a .env file to load before processing flags",
    )
    parser.add_argument(
        "--log-level",
        dest="log_level",
        default=None,
        help="Override CAVECRAWL_LOG_LEVEL for this run",
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"cavecrawl {__version__}",
    )

    subparsers = parser.add_subparsers(dest="command")

    preview = subparsers.add_parser(
        "preview",
        help="Generate one cave and print it",
        formatter_class=argparse.RawTextHelpFormatter,
        description="Generate one cave in fixed seed mode and print the map.",
    )
    preview.add_argument("--seed", type=int, default=None, help="Map seed (default: parameters seed, 1234)")
    preview.add_argument("--width", type=int, default=None, help="Grid width in cells (default: 50)")
    preview.add_argument("--height", type=int, default=None, help="Grid height in cells (default: 50)")
    preview.add_argument("--json", action="store_true", help="Print the map, placements and metrics as JSON")
    preview.add_argument(
        "--from-env",
        dest="from_env",
        action="store_true",
        help="Start from CAVE_* environment variables instead of the defaults",
    )
    preview.add_argument(
        "--require-reachable",
        dest="require_reachable",
        action="store_true",
        help="Regenerate until the goal can be walked to from the start",
    )
    preview.add_argument("--no-color", dest="no_color", action="store_true", help="Disable colored ASCII output")
    preview.set_defaults(command="preview")

    return parser.parse_args(_with_preview_command(argv))


GLOBAL_OPTIONS = ("--env-file", "--log-level")
TOP_LEVEL_FLAGS = ("--version",)
HELP_FLAGS = ("-h", "--help")


def _with_preview_command(argv: list[str]) -> list[str]:
    """Reorder argv as ``[global options] preview [preview options]``.

    Global options may appear on either side of ``preview`` and the subcommand
    itself may be omitted. ``--help`` stays on the top-level parser unless
    ``preview`` was named.
    """
    named = "preview" in argv
    head: list[str] = []
    rest: list[str] = []
    args = iter(argv)
    for arg in args:
        name = arg.split("=", 1)[0]
        if name in GLOBAL_OPTIONS:
            head.append(arg)
            if "=" not in arg:
                value = next(args, None)
                if value is not None:
                    head.append(value)
        elif arg in TOP_LEVEL_FLAGS or (arg in HELP_FLAGS and not named):
            head.append(arg)
        elif arg != "preview":
            rest.append(arg)
    return head + ["preview"] + rest


def build_parameters(args: argparse.Namespace) -> GenerationParameters:
    base = parameters_from_env(load_env_file=False) if args.from_env else GenerationParameters()
    changes = {"seed_mode": SEED_MODE_FIXED}
    if args.seed is not None:
        changes["seed"] = args.seed
    if args.width is not None:
        changes["width"] = args.width
    if args.height is not None:
        changes["height"] = args.height
    if args.require_reachable:
        changes["require_goal_reachable"] = True
    return base.replace(**changes).validate()


def run_preview(args: argparse.Namespace) -> int:
    params = build_parameters(args)
    generator = CaveGenerator(params, items=STARTER_ITEMS, enemies=STARTER_ENEMIES)
    result = generator.generate()
    if args.json:
        print(json.dumps(result.to_json(), indent=2))
        return 0
    ascii_map = result.to_ascii()
    use_color = not args.no_color and sys.stdout.isatty()
    if use_color:
        _color_init()
        ascii_map = colorize(ascii_map)
    print(ascii_map)
    m = result.metrics
    print(
        f"seed={result.seed} attempts={result.attempts} start={result.start} goal={result.goal} "
        f"key={result.key_position} treasures={len(result.treasures)} enemies={len(result.enemies)} "
        f"goal_reachable={m.get('goal_reachable')} runtime_ms={m.get('runtime_ms')}"
    )
    return 0


def main(argv: list[str]) -> int:
    args = parse_args(argv)
    if getattr(args, "env_file", None):
        load_dotenv(args.env_file)
    else:
        # Load default .env if present (no error if missing)
        load_dotenv()
    if args.log_level:
        configure(level=args.log_level)
    elif args.json:
        # log records share stdout; keep the JSON document clean
        configure(level="error")

    try:
        return run_preview(args)
    except CaveError as exc:
        log.error(event="cli_failed", error=type(exc).__name__, message=str(exc))
        print(f"[ERROR] {exc}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
