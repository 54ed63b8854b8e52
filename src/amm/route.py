from __future__ import annotations

import logging
from typing import Optional

from .errors import InvalidTokenError, NoRouteError
from .outcome import Outcome, attempt
from .pair import Pair
from .price import Price
from .token import Token, TokenAmount

logger = logging.getLogger(__name__)


class Route:
    """Represents a swap route through one or more pairs."""

    def __init__(
        self, pairs: list[Pair], input_token: Token, output_token: Optional[Token] = None
    ):
        if not pairs:
            raise ValueError("Route needs at least one pair")
        path = [input_token]
        for pair in pairs:
            if not pair.involves_token(path[-1]):
                raise InvalidTokenError(
                    f"{path[-1].symbol} is not part of {pair.token0.symbol}/{pair.token1.symbol}"
                )
            path.append(pair.other_token(path[-1]))
        if output_token is not None and path[-1] != output_token:
            raise InvalidTokenError(
                f"Route ends in {path[-1].symbol}, expected {output_token.symbol}"
            )
        self.pairs = list(pairs)
        self.path = path  # token_in → intermediate... → token_out

    @property
    def input_token(self) -> Token:
        return self.path[0]

    @property
    def output_token(self) -> Token:
        return self.path[-1]

    @property
    def num_hops(self) -> int:
        return len(self.pairs)

    @property
    def mid_price(self) -> Price:
        """Mid price of the input token in the output token across all hops."""
        price = self.pairs[0].price_of(self.path[0])
        for idx, pair in enumerate(self.pairs[1:], start=1):
            price = price.multiply(pair.price_of(self.path[idx]))
        return price

    def get_output_amount(self, amount_in: TokenAmount) -> tuple[TokenAmount, list[Pair]]:
        """Simulate the full route; return final output and the pairs after it."""
        if amount_in.token != self.input_token:
            raise InvalidTokenError(
                f"Route starts with {self.input_token.symbol}, got {amount_in.token.symbol}"
            )
        amount = amount_in
        next_pairs: list[Pair] = []
        for pair in self.pairs:
            amount, next_pair = pair.get_output_amount(amount)
            next_pairs.append(next_pair)
        return amount, next_pairs

    def get_input_amount(self, amount_out: TokenAmount) -> tuple[TokenAmount, list[Pair]]:
        """Input needed to receive *amount_out* at the end of the route."""
        if amount_out.token != self.output_token:
            raise InvalidTokenError(
                f"Route ends with {self.output_token.symbol}, got {amount_out.token.symbol}"
            )
        amount = amount_out
        next_pairs: list[Pair] = []
        for pair in reversed(self.pairs):
            amount, next_pair = pair.get_input_amount(amount)
            next_pairs.append(next_pair)
        next_pairs.reverse()
        return amount, next_pairs

    def get_intermediate_amounts(self, amount_in: TokenAmount) -> list[TokenAmount]:
        """Return amount at each step: [input, after_hop1, after_hop2, ...]"""
        if amount_in.token != self.input_token:
            raise InvalidTokenError(
                f"Route starts with {self.input_token.symbol}, got {amount_in.token.symbol}"
            )
        amounts = [amount_in]
        for pair in self.pairs:
            current, _ = pair.get_output_amount(amounts[-1])
            amounts.append(current)
        return amounts

    def __repr__(self) -> str:
        return "Route(" + " -> ".join(token.symbol for token in self.path) + ")"


class RouteFinder:
    """
    Finds routes between tokens over a set of pair snapshots.
    """

    def __init__(self, pairs: list[Pair]):
        self.pairs = pairs
        self.graph = self._build_graph()

    def _build_graph(self) -> dict[Token, list[tuple[Pair, Token]]]:
        """
        Build adjacency graph: token → [(pair, other_token), ...]
        """
        graph: dict[Token, list[tuple[Pair, Token]]] = {}
        for pair in self.pairs:
            graph.setdefault(pair.token0, []).append((pair, pair.token1))
            graph.setdefault(pair.token1, []).append((pair, pair.token0))
        return graph

    def find_all_routes(
        self, token_in: Token, token_out: Token, max_hops: int = 3
    ) -> list[Route]:
        """
        Find all simple routes up to max_hops.
        """
        if max_hops <= 0:
            return []

        routes: list[Route] = []

        def dfs(
            current: Token,
            pairs_used: list[Pair],
            visited_tokens: set[Token],
        ) -> None:
            if current == token_out:
                routes.append(Route(list(pairs_used), token_in, token_out))
                return
            if len(pairs_used) >= max_hops:
                return

            for pair, other_token in self.graph.get(current, []):
                if any(pair is used for used in pairs_used):
                    continue
                if other_token in visited_tokens:
                    continue
                pairs_used.append(pair)
                visited_tokens.add(other_token)
                dfs(other_token, pairs_used, visited_tokens)
                visited_tokens.remove(other_token)
                pairs_used.pop()

        if token_in == token_out:
            return []
        dfs(token_in, [], {token_in})
        return routes

    def compare_routes(
        self, amount_in: TokenAmount, token_out: Token, max_hops: int = 3
    ) -> list[tuple[Route, Outcome[tuple[TokenAmount, list[Pair]]]]]:
        """
        Simulate every route; failed simulations are kept as failed outcomes.
        """
        routes = self.find_all_routes(amount_in.token, token_out, max_hops=max_hops)
        return [(route, attempt(route.get_output_amount, amount_in)) for route in routes]

    def find_best_route(
        self, amount_in: TokenAmount, token_out: Token, max_hops: int = 3
    ) -> tuple[Route, TokenAmount]:
        """
        Find route that maximizes output.
        Returns (best_route, output_amount).
        """
        comparisons = self.compare_routes(amount_in, token_out, max_hops=max_hops)
        if not comparisons:
            raise NoRouteError(
                f"No route found from {amount_in.token.symbol} to {token_out.symbol}"
            )

        best: Optional[tuple[Route, TokenAmount]] = None
        for route, outcome in comparisons:
            if not outcome.success:
                logger.debug("Skipping %r: %s", route, outcome.error)
                continue
            output, _ = outcome.unwrap()
            if best is None or output.raw > best[1].raw:
                best = (route, output)

        if best is None:
            raise NoRouteError(
                f"No route from {amount_in.token.symbol} to {token_out.symbol} "
                f"can fill {amount_in.raw}"
            )
        return best
