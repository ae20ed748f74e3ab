import argparse
import logging
import sys

from .core import CALL, PUT, DEFAULT_RATE, InvalidInputError, MarketState, OptionContract, StepSizes
from .greeks import quote
from .grid import COMPUTATIONS, evaluate_grid, to_tidy, underlying_range, weekly_maturities

logger = logging.getLogger(__name__)


def _kind(s: str):
    s = s.lower()
    if s in {"call", "c"}:
        return CALL
    if s in {"put", "p"}:
        return PUT
    raise argparse.ArgumentTypeError("kind must be 'call' or 'put'")


def add_common(parser: argparse.ArgumentParser):
    parser.add_argument("--K", type=float, required=True, help="strike")
    parser.add_argument("--sigma", type=float, required=True, help="flat volatility")
    parser.add_argument("--r", type=float, default=DEFAULT_RATE, help="cont. risk-free")
    parser.add_argument("--d", type=float, default=0.0, help="cont. dividend yield")
    parser.add_argument("--kind", type=_kind, default=CALL, help="call|put")


def cmd_quote(args):
    contract = OptionContract(args.K, args.kind)
    market = MarketState(args.S, args.sigma, args.r, args.d)
    for name, value in quote(contract, market, args.tau, StepSizes()).items():
        print(f"{name:<6} {value:.10f}")


def cmd_grid(args):
    taus = weekly_maturities(args.weeks)
    spots = underlying_range(args.s_min, args.s_max, args.n_s)
    grid = evaluate_grid(taus, spots, args.K, args.sigma, r=args.r, d=args.d,
                         kind=args.kind, computation=args.measure)
    frame = to_tidy(grid, spots, taus)
    if args.output:
        frame.to_csv(args.output, index=False)
        logger.info("wrote %d rows to %s", len(frame), args.output)
    else:
        frame.to_csv(sys.stdout, index=False)


def main(argv=None):
    p = argparse.ArgumentParser(prog="optgreeks",
                                description="Black-Scholes-Merton prices and Greeks")
    p.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = p.add_subparsers(dest="cmd", required=True)

    # Single point
    p_q = sub.add_parser("quote", help="price and Greeks at one point")
    add_common(p_q)
    p_q.add_argument("--S", type=float, required=True, help="underlying price")
    p_q.add_argument("--tau", type=float, required=True, help="years to maturity")
    p_q.set_defaults(func=cmd_quote)

    # Maturity x underlying grid, tidy CSV
    p_g = sub.add_parser("grid", help="tidy CSV over maturities x underlying prices")
    add_common(p_g)
    p_g.add_argument("--weeks", type=float, nargs="+", required=True,
                     help="maturities in weeks")
    p_g.add_argument("--s-min", dest="s_min", type=float, required=True)
    p_g.add_argument("--s-max", dest="s_max", type=float, required=True)
    p_g.add_argument("--n-s", dest="n_s", type=int, default=101)
    p_g.add_argument("--measure", choices=sorted(COMPUTATIONS), default="price")
    p_g.add_argument("--output", default=None, help="CSV path (default stdout)")
    p_g.set_defaults(func=cmd_grid)

    args = p.parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s")
    try:
        args.func(args)
    except InvalidInputError as exc:
        p.exit(2, f"optgreeks: error: {exc}\n")


if __name__ == "__main__":
    main()
