# src/factordb/cli.py

"""
factordb - look up the factorization of a number on FactorDB

Description:
    Queries http://factordb.com/ for a non-negative integer of any length
    and prints its factors, one per line, or the raw API response.

usage: see factordb -h
"""

from __future__ import annotations

import argparse
import faulthandler
import io
import sys
import textwrap
import traceback

from colorama import Fore, Style
from colorama import init as colorama_init

from factordb import __version__ as _ver
from factordb.client import FactorDbClient
from factordb.config import load_settings
from factordb.errors import FactorDbError, UserInputError
from factordb.fmt import abbr_decimal, factor_lines, format_factorization, format_status, format_summary
from factordb.runtime import APPLY, debug_print
from factordb.runtime import current as _rt_current
from factordb.utility import flatten_dotted, to_query_string, typename


def _install_loud_error_handlers(debug: bool) -> None:
    if not debug:
        return
    # Always show full Python tracebacks; captured or redirected streams have no fileno
    try:
        faulthandler.enable()
    except (io.UnsupportedOperation, AttributeError, ValueError):
        if sys.__stderr__ is not None:
            faulthandler.enable(file=sys.__stderr__)

    def _excepthook(exc_type, exc, tb):
        sys.stderr.write("\n[UNCAUGHT EXCEPTION]\n")
        traceback.print_exception(exc_type, exc, tb, file=sys.stderr)
        sys.stderr.flush()
    sys.excepthook = _excepthook


def _print_user_error(msg: str) -> None:
    """Uniform, one-line friendly error."""
    prefix = f"{Fore.RED}Error:{Style.RESET_ALL}" if _rt_current().color else "Error:"
    if not msg.startswith("Error:"):
        msg = f"{prefix} {msg}"
    print(msg, file=sys.stderr)


def _positive_float(text: str) -> float:
    try:
        v = float(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not a number: {text!r}") from None
    if v <= 0:
        raise argparse.ArgumentTypeError(f"must be > 0, got {text}")
    return v


# ---- argparse ----
def _build_parser() -> argparse.ArgumentParser:

    epilog = textwrap.dedent("""\
    output modes (pick one):
      (default)       all factors, repeated by exponent, one per line
      --unique        each distinct factor once, one per line
      --summary       NUMBER = f1 f2 ... on a single line
      --json          the raw JSON returned by the API

    settings:
      Read from $FACTORDB_CONFIG, else $FACTORDB_HOME/config.toml,
      else ~/.config/factordb/config.toml. Command-line flags win.
    """)

    p = argparse.ArgumentParser(
        prog="factordb",
        description="Find the factors of a number using FactorDB (http://factordb.com/)",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=epilog,
    )
    p.add_argument("number", help="non-negative integer to look up (any length)")

    mode = p.add_mutually_exclusive_group()
    mode.add_argument("--print-factors", dest="mode", action="store_const", const="factors",
                      help="print all factors (including repeating ones) on each line")
    mode.add_argument("--unique", "--print-unique-factors", dest="mode", action="store_const", const="unique",
                      help="print unique factors on each line")
    mode.add_argument("--summary", dest="mode", action="store_const", const="summary",
                      help="print 'NUMBER = f1 f2 ...' on one line")
    mode.add_argument("--json", dest="mode", action="store_const", const="json",
                      help="print JSON output of the FactorDB API")

    p.add_argument("--timeout", type=_positive_float, default=None, help="request timeout in seconds")
    p.add_argument("--endpoint", default=None, help="API URL (default: http://factordb.com/api)")
    p.add_argument("--config", default=None, help="settings file to use instead of the default location")
    p.add_argument("--no-color", action="store_true", help="disable coloured error/status output")
    p.add_argument("--debug", action="store_true", help="show request trace and full tracebacks")
    p.add_argument("--version", action="version", version=f"%(prog)s {_ver}")
    p.set_defaults(mode="factors")
    return p


def main(argv=None) -> int:
    """Thin wrapper: catch friendly errors, hide tracebacks unless debug."""
    try:
        return _main_impl(argv)
    except UserInputError as e:
        _print_user_error(str(e))
        return 2
    except FactorDbError as e:
        _print_user_error(str(e))
        if _rt_current().debug and e.cause is not None:
            print(f"  caused by {e.cause.__class__.__name__}: {e.cause}", file=sys.stderr)
        return 1
    except KeyboardInterrupt:
        print("Aborted by user.", file=sys.stderr)
        return 130
    except Exception as e:
        if _rt_current().debug:
            raise
        print(f"Unexpected error: {e.__class__.__name__}: {e}", file=sys.stderr)
        print("Run with --debug for a full traceback.", file=sys.stderr)
        return 1


# ---- main ----
def _main_impl(argv=None) -> int:

    colorama_init()

    parser = _build_parser()
    args = parser.parse_args(argv)
    rt = _rt_current()
    rt.debug = bool(args.debug)

    # settings file, then command-line overrides
    selected = load_settings(args.config)
    APPLY(selected)
    if args.debug:
        rt.debug = True
    if args.no_color:
        rt.color = False

    _install_loud_error_handlers(rt.debug)

    if rt.debug:
        src = getattr(selected, "_source", None)
        debug_print(f"factordb {_ver}, settings: {src or '(defaults)'}")
        flat = flatten_dotted(selected.as_dict())
        for k in sorted(flat.keys(), key=str.lower):
            v = flat[k]
            debug_print(f"    {k:.<30} {v!r} ({typename(v)})")

    # reject bad input before anything touches the network
    query = to_query_string(args.number)

    client = FactorDbClient(endpoint=args.endpoint, timeout=args.timeout)

    if args.mode == "json":
        print(client.get_json(query))
        return 0

    result = client.get(query)
    debug_print(f"number {abbr_decimal(result.number)}: {format_status(result.status, rt.color)}")
    debug_print(f"factorization: {format_factorization(result.factors)}")

    if args.mode == "summary":
        print(format_summary(result, label=args.number.strip()))
    elif args.mode == "unique":
        for line in factor_lines(result.unique_factors()):
            print(line)
    else:
        for line in factor_lines(result.factors_flattened()):
            print(line)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
