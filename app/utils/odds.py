PROBABILITY_FLOOR = 0.001
PROBABILITY_CEILING = 0.999


def clamp_probability(prob: float) -> float:
    return max(PROBABILITY_FLOOR, min(PROBABILITY_CEILING, prob))


def american_to_implied_probability(american_odds: int) -> float:
    if american_odds > 0:
        return 100.0 / (american_odds + 100.0)
    else:
        return abs(american_odds) / (abs(american_odds) + 100.0)


def probability_to_american(prob: float) -> int:
    prob = clamp_probability(prob)

    if prob > 0.5:
        return int(round(-100 * prob / (1 - prob)))
    else:
        return int(round(100 * (1 - prob) / prob))


def to_american_odds(prob: float) -> str:
    """
    Quote a win probability as a signed American-odds string.

    Favorites (prob > 0.5) are negative, everything else positive:
    0.6 -> "-150", 0.5 -> "+100", 0.25 -> "+300".
    """
    return f"{probability_to_american(prob):+d}"
