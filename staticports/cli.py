from __future__ import annotations
import argparse, json, logging, sys
from pathlib import Path

from .calculator import size_ports
from .errors import ConfigEmpty, ConfigNotFound, InvalidPhysicalModel, ParameterError
from .io import load_parameters
from .sweep import port_size_table, write_table
from .units import Velocity, VelocityUnit

logger = logging.getLogger(__name__)


def _velocity_arg(text: str) -> Velocity:
    try:
        return Velocity(float(text), VelocityUnit.M_S)
    except ValueError:
        pass
    try:
        return Velocity.parse(text)
    except ParameterError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _ports_arg(text: str) -> int:
    try:
        n = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid port count {text!r}") from None
    if n < 1:
        raise argparse.ArgumentTypeError("port count must be >= 1")
    return n


def build_parser():
    p = argparse.ArgumentParser(
        prog="staticports",
        description="Static pressure port diameter for a rocket altimeter bay",
    )
    p.add_argument("-p", "--params", required=True, type=Path, help="Parameters file (JSON, comments allowed)")
    p.add_argument("--breakdown", action="store_true", help="Print all intermediates as JSON instead of the bare diameter")
    p.add_argument("--ports", nargs="+", type=_ports_arg, default=None,
                   help="Port counts for the sweep table (default: value from the parameters file)")
    p.add_argument("--velocities", nargs="+", type=_velocity_arg, default=None,
                   help="Max velocities for the sweep table; bare numbers are m/s, e.g. 150 '600 km/h'")
    p.add_argument("--csv-out", type=Path, default=None, help="Write the sweep table to this CSV")
    p.add_argument("-v", "--verbose", action="count", default=0, help="-v info, -vv debug logging on stderr")
    return p


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, stream=sys.stderr,
                        format="%(levelname)s %(name)s: %(message)s")


def main(argv=None) -> int:
    ap = build_parser()
    a = ap.parse_args(argv)
    _configure_logging(a.verbose)

    try:
        params = load_parameters(a.params)
        res = size_ports(params)
        table = None
        if a.csv_out or a.ports or a.velocities:
            table = port_size_table(params, ports=a.ports, velocities=a.velocities)
            if a.csv_out:
                write_table(table, a.csv_out)
                logger.info("Sweep table written to %s", a.csv_out)
    except (ConfigNotFound, ConfigEmpty) as e:
        print(e, file=sys.stderr)
        return 1
    except ParameterError as e:
        print(f"Invalid parameters: {e}", file=sys.stderr)
        return 1
    except InvalidPhysicalModel as e:
        print(f"Invalid physical model: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Cannot access file: {e}", file=sys.stderr)
        return 1

    if table is not None and not a.csv_out:
        print(table.to_string(index=False), file=sys.stderr)

    if a.breakdown:
        out = {"parameters": params.to_dict(), **res.to_dict()}
        print(json.dumps(out, indent=2))
    else:
        print(f"{res.port_diameter_mm:.1f}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
