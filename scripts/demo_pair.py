import logging

from amm import Pair, RouteFinder, Token, TokenAmount
from amm.log import configure_logging

logger = logging.getLogger("amm.demo")

SHIB = Token(1, "0x00000000000000000000000000000000000000a1", 18, "SHIB")
ETH = Token(1, "0x00000000000000000000000000000000000000b2", 18, "ETH")
USDC = Token(1, "0x00000000000000000000000000000000000000c3", 6, "USDC")


def _pair(token0: Token, token1: Token, reserve0: int, reserve1: int, pool: str) -> Pair:
    return Pair(TokenAmount(token0, reserve0), TokenAmount(token1, reserve1), pool)


def main() -> None:
    configure_logging("INFO")
    shib_eth = _pair(
        SHIB,
        ETH,
        reserve0=1_000_000_000 * 10**18,
        reserve1=300 * 10**18,
        pool="0x00000000000000000000000000000000000000f0",
    )
    shib_usdc = _pair(
        SHIB,
        USDC,
        reserve0=1_000_000_000 * 10**18,
        reserve1=400_000 * 10**6,
        pool="0x00000000000000000000000000000000000000f1",
    )
    eth_usdc = _pair(
        ETH,
        USDC,
        reserve0=4_000 * 10**18,
        reserve1=5_000_000 * 10**6,
        pool="0x00000000000000000000000000000000000000f2",
    )

    logger.info("ETH mid price: %s USDC", eth_usdc.price_of(ETH).to_significant())

    amount_in = TokenAmount(ETH, 10 * 10**18)
    usdc_out, after = eth_usdc.get_output_amount(amount_in)
    logger.info(
        "Sell %s -> %s (impact %s)",
        amount_in,
        usdc_out,
        eth_usdc.get_price_impact(amount_in),
    )
    logger.info("ETH mid price after: %s USDC", after.price_of(ETH).to_significant())

    finder = RouteFinder([shib_eth, shib_usdc, eth_usdc])
    route, output = finder.find_best_route(
        TokenAmount(SHIB, 1_000_000 * 10**18), ETH
    )
    hop_symbols = " -> ".join(token.symbol for token in route.path)
    logger.info("Best route: %s | Hops: %s | Output: %s", hop_symbols, route.num_hops, output)


if __name__ == "__main__":
    main()
