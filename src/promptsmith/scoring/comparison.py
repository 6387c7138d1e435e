"""Per-metric winners and significance across scored variants."""

from __future__ import annotations

from typing import Mapping

from promptsmith.types import MetricComparison, QualityScore

METRICS: tuple[str, ...] = ("clarity", "specificity", "structure", "completeness", "overall")


def compare_metric(metric: str, scores: Mapping[str, QualityScore]) -> MetricComparison:
    """Winner is the first-listed variant holding the maximum value.

    Significance is the gap between the best value and the runner-up
    variant's value, so a tie at the top yields 0.
    """
    if not scores:
        raise ValueError("At least one variant is required")

    values = {variant_id: score.get(metric) for variant_id, score in scores.items()}
    winner = next(iter(values))
    for variant_id, value in values.items():
        if value > values[winner]:
            winner = variant_id

    ranked = sorted(values.values(), reverse=True)
    significance = ranked[0] - ranked[1] if len(ranked) > 1 else 0.0
    return MetricComparison(
        metric=metric,
        values=values,
        winner=winner,
        significance=round(max(0.0, min(1.0, significance)), 6),
    )


def compare_scores(scores: Mapping[str, QualityScore]) -> tuple[str, tuple[MetricComparison, ...]]:
    metrics = tuple(compare_metric(metric, scores) for metric in METRICS)
    overall = metrics[-1]
    return overall.winner, metrics


def summarize(winner: str, score: QualityScore, significance: float) -> str:
    dimensions = sorted(METRICS[:-1], key=lambda metric: (-score.get(metric), METRICS.index(metric)))
    return (
        f"{winner} wins with overall {score.overall:.2f} "
        f"(margin {significance:.2f}); strongest in {dimensions[0]} and {dimensions[1]}"
    )
