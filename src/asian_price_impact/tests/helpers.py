"""Brute-force reference pricers, written independently of the library code."""

import itertools
import math


def reference_asian_price(S0, K, r, up, down, n, *, averaging="geometric", call=True):
    """Discounted expected Asian payoff on a plain (u, d) lattice with p = (r - d) / (u - d).

    Walks every move sequence with itertools.product and plain floats.
    """
    p = (r - down) / (up - down)
    total = 0.0
    for moves in itertools.product((0, 1), repeat=n):
        prices = [S0]
        for move in moves:
            prices.append(prices[-1] * (up if move else down))
        if averaging == "geometric":
            avg = math.exp(sum(math.log(x) for x in prices) / len(prices))
        else:
            avg = sum(prices) / len(prices)
        payoff = max(0.0, avg - K) if call else max(0.0, K - avg)
        k = sum(moves)
        total += p**k * (1.0 - p) ** (n - k) * payoff
    return total / r**n


def impact_factors(up, down, lambda_, v_u, v_d):
    return up * math.exp(lambda_ * v_u), down * math.exp(-lambda_ * v_d)
