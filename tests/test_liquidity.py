import pytest

from amm import (
    MINIMUM_LIQUIDITY,
    InsufficientInputAmountError,
    InsufficientReservesError,
    InvalidAmountError,
    InvalidAssetError,
    InvalidTokenError,
    MissingParameterError,
    Pair,
    ParseError,
    Token,
    TokenAmount,
)

TOKEN_A = Token(1, "0x0000000000000000000000000000000000000001", 18, "A")
TOKEN_B = Token(1, "0x0000000000000000000000000000000000000002", 18, "B")
OTHER = Token(1, "0x0000000000000000000000000000000000000003", 18, "C")
POOL = "0x0000000000000000000000000000000000000abc"


def _pair(reserve_a: int, reserve_b: int) -> Pair:
    return Pair(TokenAmount(TOKEN_A, reserve_a), TokenAmount(TOKEN_B, reserve_b), POOL)


def _lp(pair: Pair, raw: int) -> TokenAmount:
    return TokenAmount(pair.liquidity_token, raw)


# ── minted ───────────────────────────────────────────────────


def test_first_deposit_locks_minimum_liquidity():
    pair = _pair(10_000, 10_000)

    minted = pair.get_liquidity_minted(
        _lp(pair, 0), TokenAmount(TOKEN_A, 10_000), TokenAmount(TOKEN_B, 10_000)
    )

    assert minted == _lp(pair, 10_000 - MINIMUM_LIQUIDITY)


def test_first_deposit_uses_integer_sqrt():
    pair = _pair(0, 0)

    minted = pair.get_liquidity_minted(
        _lp(pair, 0), TokenAmount(TOKEN_A, 10**36 + 7), TokenAmount(TOKEN_B, 3)
    )

    # isqrt(3 * 10**36 + 21) = 1732050807568877293
    assert minted.raw == 1732050807568877293 - MINIMUM_LIQUIDITY


def test_first_deposit_too_small():
    pair = _pair(0, 0)
    with pytest.raises(InsufficientInputAmountError):
        pair.get_liquidity_minted(
            _lp(pair, 0), TokenAmount(TOKEN_A, 1000), TokenAmount(TOKEN_B, 1000)
        )


def test_proportional_deposit():
    pair = _pair(10_000, 1_000)

    minted = pair.get_liquidity_minted(
        _lp(pair, 10_000), TokenAmount(TOKEN_A, 2_000), TokenAmount(TOKEN_B, 200)
    )

    assert minted.raw == 2_000


def test_unbalanced_deposit_takes_smaller_share():
    pair = _pair(10_000, 1_000)

    minted = pair.get_liquidity_minted(
        _lp(pair, 10_000), TokenAmount(TOKEN_A, 2_000), TokenAmount(TOKEN_B, 100)
    )

    assert minted.raw == 1_000


def test_minted_rounds_to_zero():
    pair = _pair(10**18, 10**18)
    with pytest.raises(InsufficientInputAmountError):
        pair.get_liquidity_minted(
            _lp(pair, 1000), TokenAmount(TOKEN_A, 1), TokenAmount(TOKEN_B, 1)
        )


def test_minted_with_supply_but_empty_reserve():
    pair = _pair(0, 1000)
    with pytest.raises(InsufficientReservesError):
        pair.get_liquidity_minted(
            _lp(pair, 1000), TokenAmount(TOKEN_A, 10), TokenAmount(TOKEN_B, 10)
        )


def test_minted_requires_sorted_amounts():
    pair = _pair(1000, 1000)
    with pytest.raises(InvalidTokenError):
        pair.get_liquidity_minted(
            _lp(pair, 1000), TokenAmount(TOKEN_B, 10), TokenAmount(TOKEN_A, 10)
        )


def test_minted_requires_liquidity_token_supply():
    pair = _pair(1000, 1000)
    with pytest.raises(InvalidTokenError):
        pair.get_liquidity_minted(
            TokenAmount(TOKEN_A, 1000), TokenAmount(TOKEN_A, 10), TokenAmount(TOKEN_B, 10)
        )


# ── value ────────────────────────────────────────────────────


def test_value_full_and_half_share():
    pair = _pair(1000, 1000)

    assert pair.get_liquidity_value(TOKEN_A, _lp(pair, 1000), _lp(pair, 1000)).raw == 1000
    assert pair.get_liquidity_value(TOKEN_B, _lp(pair, 1000), _lp(pair, 500)).raw == 500


def test_value_rounds_down():
    pair = _pair(1000, 1000)

    value = pair.get_liquidity_value(TOKEN_A, _lp(pair, 3), _lp(pair, 1))

    assert value == TokenAmount(TOKEN_A, 333)


def test_value_with_protocol_fee():
    pair = _pair(1000, 1000)

    # rootK=1000, rootKLast=500: fee = 500*500 // (1000*5 + 500) = 45
    value = pair.get_liquidity_value(
        TOKEN_A, _lp(pair, 500), _lp(pair, 500), fee_on=True, k_last=500 * 500
    )

    assert value.raw == 917


@pytest.mark.parametrize("k_last", ["250000", "0x3d090", 250000])
def test_k_last_representations(k_last):
    pair = _pair(1000, 1000)

    value = pair.get_liquidity_value(
        TOKEN_A, _lp(pair, 500), _lp(pair, 500), fee_on=True, k_last=k_last
    )

    assert value.raw == 917


def test_fee_on_without_growth_matches_fee_off():
    pair = _pair(1000, 1000)
    supply, liquidity = _lp(pair, 1000), _lp(pair, 500)

    fee_off = pair.get_liquidity_value(TOKEN_A, supply, liquidity)
    fee_on = pair.get_liquidity_value(
        TOKEN_A, supply, liquidity, fee_on=True, k_last=1000 * 1000
    )

    assert fee_on == fee_off


def test_fee_on_with_shrunk_k_matches_fee_off():
    pair = _pair(1000, 1000)
    supply, liquidity = _lp(pair, 1000), _lp(pair, 250)

    fee_on = pair.get_liquidity_value(
        TOKEN_B, supply, liquidity, fee_on=True, k_last=4 * 1000 * 1000
    )

    assert fee_on.raw == 250


def test_fee_on_zero_k_last_matches_fee_off():
    pair = _pair(1000, 1000)

    value = pair.get_liquidity_value(
        TOKEN_A, _lp(pair, 1000), _lp(pair, 500), fee_on=True, k_last="0"
    )

    assert value.raw == 500


def test_fee_on_requires_k_last():
    pair = _pair(1000, 1000)
    with pytest.raises(MissingParameterError):
        pair.get_liquidity_value(TOKEN_A, _lp(pair, 1000), _lp(pair, 500), fee_on=True)


def test_malformed_k_last():
    pair = _pair(1000, 1000)
    with pytest.raises(ParseError):
        pair.get_liquidity_value(
            TOKEN_A, _lp(pair, 1000), _lp(pair, 500), fee_on=True, k_last="1e6"
        )


def test_value_liquidity_exceeds_supply():
    pair = _pair(1000, 1000)
    with pytest.raises(InvalidAmountError):
        pair.get_liquidity_value(TOKEN_A, _lp(pair, 500), _lp(pair, 501))


def test_value_zero_supply():
    pair = _pair(1000, 1000)
    with pytest.raises(InvalidAmountError):
        pair.get_liquidity_value(TOKEN_A, _lp(pair, 0), _lp(pair, 0))


def test_value_token_checks():
    pair = _pair(1000, 1000)

    with pytest.raises(InvalidAssetError):
        pair.get_liquidity_value(OTHER, _lp(pair, 1000), _lp(pair, 500))
    with pytest.raises(InvalidTokenError):
        pair.get_liquidity_value(TOKEN_A, TokenAmount(TOKEN_A, 1000), _lp(pair, 500))
    with pytest.raises(InvalidTokenError):
        pair.get_liquidity_value(TOKEN_A, _lp(pair, 1000), TokenAmount(TOKEN_B, 500))
