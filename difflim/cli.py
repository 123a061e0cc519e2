"""Command line front end for the diffraction limit calculator.

Usage:
    difflim 8 10
    python -m difflim.cli 5.6 30 550 --curve 11
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from typing import List, Optional

from difflim import config
from difflim.schemas import DiffractionParameters, DiffractionResult
from difflim.solver.diffraction import (
    DEFAULT_WAVELENGTH_NM,
    InvalidArgumentError,
    calculate,
    sample_curve,
)
from difflim.solver.models.optical import feature_size_um

logger = logging.getLogger(__name__)

BOLD = "\x1b[1m"
RED = "\x1b[31m"
GREEN = "\x1b[32m"
YELLOW = "\x1b[33m"
BLUE = "\x1b[34m"
RESET = "\x1b[0m"

RULE = "─" * 30

# Options that consume the following token as their value
VALUE_OPTIONS = ("--curve",)

DESCRIPTION = "Diffraction Limit Calculator"

EPILOG = """\
Arguments:
  <f-number>      : Lens aperture f-stop (e.g., 2.8, 4, 5.6, 8, 11, 16)
  <contrast%>     : Target contrast percentage (0-100)
  [wavelength_nm] : Light wavelength in nanometers (optional, default: 520)

Examples:
  {prog} 8 10
  {prog} 5.6 30 550
  {prog} 16 50
"""


class UsageError(Exception):
    """Command line arguments could not be parsed."""


class _ArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports errors instead of exiting with status 2."""

    def error(self, message: str):
        raise UsageError(message)


def _is_number(token: str) -> bool:
    try:
        float(token)
    except ValueError:
        return False
    return True


def _positionals_last(argv: List[str]) -> List[str]:
    """Move positionals behind '--' so values like '-1e3' are not read as flags.

    argparse only treats plain negative numbers ('-1', '-0.5') as values.
    """
    options: List[str] = []
    positionals: List[str] = []
    tokens = iter(argv)
    for token in tokens:
        if token == "--":
            positionals.extend(tokens)
            break
        if token.startswith("-") and not _is_number(token):
            options.append(token)
            if token in VALUE_OPTIONS:
                value = next(tokens, None)
                if value is not None:
                    options.append(value)
        else:
            positionals.append(token)
    return options + ["--"] + positionals


def _color(text: str, code: str) -> str:
    return f"{code}{text}{RESET}"


def _fmt(value: float) -> str:
    """Render a number without a trailing '.0' (8 -> '8', 5.6 -> '5.6')."""
    return f"{value:g}"


def build_parser(prog: str = "difflim") -> argparse.ArgumentParser:
    parser = _ArgumentParser(
        prog=prog,
        usage="%(prog)s <f-number> <contrast%%> [wavelength_nm]",
        description=DESCRIPTION,
        epilog=EPILOG.format(prog=prog),
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("f_number", type=float, metavar="f-number", help="Lens aperture f-stop")
    parser.add_argument("contrast_percent", type=float, metavar="contrast%", help="Target contrast percentage")
    parser.add_argument(
        "wavelength_nm", type=float, nargs="?", default=DEFAULT_WAVELENGTH_NM,
        metavar="wavelength_nm",
        help="Light wavelength in nanometers (default: 520)",
    )
    parser.add_argument(
        "--curve", type=int, default=None, metavar="POINTS",
        help="Also print the MTF sampled at POINTS frequencies",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Log debug information to stderr",
    )
    return parser


def format_report(params: DiffractionParameters, result: DiffractionResult) -> str:
    """Human-readable report for one solved contrast target."""
    if result.solved:
        precision = f"{result.iterations} iterations (tolerance: 1e-6)"
    else:
        precision = "exact (boundary value)"

    size = feature_size_um(result.spatial_frequency)
    size_text = "unlimited" if math.isinf(size) else f"{size:.1f}"

    lines = [
        "",
        _color("Diffraction Limit Calculation", BOLD),
        RULE,
        f"Aperture:      f/{_fmt(params.f_number)}",
        f"Contrast:      {_fmt(params.contrast_percent)}%",
        f"Wavelength:    {_fmt(params.wavelength_nm)} nm",
        _color(f"Cutoff Freq:   {result.cutoff_frequency} cycles/mm (0% contrast)", BLUE),
        _color(f"Target Freq:   {result.spatial_frequency} cycles/mm", GREEN),
        f"Precision:     {precision}",
        RULE,
        "",
        _color("Practical Interpretation:", YELLOW),
        f"At {_fmt(params.contrast_percent)}% contrast, this system can resolve features as small as",
        f"{size_text} μm (line pairs) under ideal diffraction-limited conditions.",
    ]
    return "\n".join(lines)


def format_curve(f_number: float, wavelength_nm: float, points: int) -> str:
    curve = sample_curve(f_number, wavelength_nm, points=points)
    lines = [
        "",
        _color("MTF Curve", YELLOW),
        f"{'u':>10s}  {'cycles/mm':>10s}  {'MTF':>9s}",
    ]
    for u, freq, value in curve.rows():
        lines.append(f"{u:10.4f}  {freq:10.1f}  {value:9.4f}")
    return "\n".join(lines)


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    if argv is None:
        argv = sys.argv[1:]

    try:
        args = parser.parse_args(_positionals_last(argv))
    except UsageError as e:
        print(_color(f"Error: {e}", RED), file=sys.stderr)
        print(parser.format_help())
        return 1

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else config.LOG_LEVEL,
        format=config.LOG_FORMAT,
    )

    params = DiffractionParameters(
        f_number=args.f_number,
        contrast_percent=args.contrast_percent,
        wavelength_nm=args.wavelength_nm,
    )
    logger.debug(
        f"Solving f/{_fmt(params.f_number)} at {_fmt(params.contrast_percent)}% "
        f"contrast, {_fmt(params.wavelength_nm)} nm"
    )

    try:
        result = calculate(params)
        curve_text = None
        if args.curve is not None:
            curve_text = format_curve(params.f_number, params.wavelength_nm, args.curve)
    except InvalidArgumentError as e:
        print(f"\n{_color('Calculation Error:', RED)} {e}", file=sys.stderr)
        return 1
    except ValueError as e:
        # Bad --curve point count
        print(_color(f"Error: {e}", RED), file=sys.stderr)
        return 1

    logger.debug(f"Result: {result.to_dict()}")

    print(format_report(params, result))
    if curve_text is not None:
        print(curve_text)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
