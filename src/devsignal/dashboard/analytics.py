import random
from collections.abc import Sequence

from devsignal.models.market import Confidence, PricePoint, Quote

MOOD_ROCKET = "🚀"
MOOD_COOL = "😎"
MOOD_HAPPY = "🙂"
MOOD_NEUTRAL = "😐"
MOOD_WORRIED = "😟"
MOOD_ON_FIRE = "🔥"
MOOD_ASLEEP = "😴"

# (exclusive lower bound on the average percent change, mood), checked top down
MOOD_LADDER: tuple[tuple[float, str], ...] = (
    (2.0, MOOD_ROCKET),
    (1.0, MOOD_COOL),
    (0.0, MOOD_HAPPY),
    (-1.0, MOOD_NEUTRAL),
    (-2.0, MOOD_WORRIED),
)

PREDICTION_FACTOR_LOW = 0.8
PREDICTION_FACTOR_HIGH = 1.2
HIGH_CONFIDENCE_DELTA = 1.0

MOCK_BASE_PRICE = 180.0
MOCK_BASE_PRICE_RANGE = 50.0

# (label, date, volume, jitter) for each day of the demonstration week
MOCK_WEEK: tuple[tuple[str, str, int, float], ...] = (
    ("Mon", "2024-01-15", 45201800, 0.0),
    ("Tue", "2024-01-16", 38921500, 0.01),
    ("Wed", "2024-01-17", 42178300, 0.01),
    ("Thu", "2024-01-18", 51240900, 0.015),
    ("Fri", "2024-01-19", 39871200, 0.01),
)


def average_change(quotes: Sequence[Quote]) -> float | None:
    if not quotes:
        return None

    return sum(quote.changes_percentage for quote in quotes) / len(quotes)


def calculate_market_mood(quotes: Sequence[Quote]) -> str:
    """Map the average percent change of the quotes to a coarse mood emoji."""

    average = average_change(quotes)

    if average is None:
        return MOOD_ASLEEP

    for threshold, mood in MOOD_LADDER:
        if average > threshold:
            return mood

    return MOOD_ON_FIRE


def predict_next_point(points: Sequence[PricePoint], rng: random.Random | None = None) -> PricePoint:
    """Extend the last move between the two most recent points by a random factor between 0.8 and 1.2.

    This only gives the chart a second series to draw, it has no predictive value. With a single point, that point is
    returned unchanged.
    """

    if not points:
        msg = "At least one price point is required to predict the next one."
        raise ValueError(msg)

    if len(points) < 2:  # noqa: PLR2004
        return points[0]

    rng = rng or random.Random()  # noqa: S311

    last_point = points[-1]
    previous_point = points[-2]

    recent_trend = last_point.price - previous_point.price
    predicted_change = recent_trend * rng.uniform(PREDICTION_FACTOR_LOW, PREDICTION_FACTOR_HIGH)
    confidence: Confidence = "High" if abs(recent_trend) > HIGH_CONFIDENCE_DELTA else "Medium"

    return last_point.model_copy(
        update={
            "name": "Predict",
            "price": last_point.price + predicted_change,
            "predicted": True,
            "confidence": confidence,
        }
    )


def with_prediction(points: Sequence[PricePoint], rng: random.Random | None = None) -> list[PricePoint]:
    if len(points) < 2:  # noqa: PLR2004
        return list(points)

    return [*points, predict_next_point(points, rng=rng)]


def generate_mock_history(rng: random.Random | None = None) -> list[PricePoint]:
    """Five days of plausible prices around a random base between 180 and 230."""

    rng = rng or random.Random()  # noqa: S311

    base_price = MOCK_BASE_PRICE + rng.random() * MOCK_BASE_PRICE_RANGE

    return [
        PricePoint(
            name=name,
            price=base_price * (1 + (rng.random() * 2 * jitter - jitter)),
            date=date,
            volume=volume,
        )
        for name, date, volume, jitter in MOCK_WEEK
    ]
