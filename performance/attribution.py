"""
Return attribution.

Brinson-Fachler, per segment:

    allocation  = (Wp - Wb) * (Rb - R_total_benchmark)
    selection   = Wb * (Rp - Rb)
    interaction = (Wp - Wb) * (Rp - Rb)
    total       = allocation + selection + interaction

plus per-position contribution to return (beginning weight times return).
"""

import logging
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Sequence

from config.settings import NumericConfig
from data.models.results import AttributionSummary, BrinsonAttribution, ContributionToReturn
from data.models.returns import PositionReturn, SegmentData
from financial.calculations import NumericInput, numeric_context, sum_decimals, to_decimal

logger = logging.getLogger(__name__)


def _index_segments(segments: Iterable[SegmentData], side: str) -> Dict[str, SegmentData]:
    indexed: Dict[str, SegmentData] = {}
    for seg in segments:
        if seg.segment in indexed:
            raise ValueError(f"Duplicate {side} segment '{seg.segment}'")
        indexed[seg.segment] = seg
    return indexed


def calculate_brinson_attribution(portfolio_segments: Sequence[SegmentData],
                                  benchmark_segments: Sequence[SegmentData],
                                  total_benchmark_return: NumericInput,
                                  config: Optional[NumericConfig] = None) -> List[BrinsonAttribution]:
    """
    Brinson-Fachler attribution across the union of segments.

    A segment held on only one side is kept, with weight and return zero on
    the missing side. Results list portfolio segments in input order,
    followed by benchmark-only segments.

    Raises:
        ValueError: If a segment name repeats within one side
    """
    portfolio = _index_segments(portfolio_segments, 'portfolio')
    benchmark = _index_segments(benchmark_segments, 'benchmark')
    all_segments = list(dict.fromkeys([*portfolio, *benchmark]))
    rb_total = to_decimal(total_benchmark_return)
    zero = Decimal('0')

    results = []
    with numeric_context(config):
        for segment in all_segments:
            p_seg = portfolio.get(segment)
            b_seg = benchmark.get(segment)

            wp = p_seg.weight if p_seg else zero
            rp = p_seg.return_ if p_seg else zero
            wb = b_seg.weight if b_seg else zero
            rb = b_seg.return_ if b_seg else zero

            allocation = (wp - wb) * (rb - rb_total)
            selection = wb * (rp - rb)
            interaction = (wp - wb) * (rp - rb)

            results.append(BrinsonAttribution(
                segment=segment,
                portfolio_weight=wp,
                benchmark_weight=wb,
                portfolio_return=rp,
                benchmark_return=rb,
                allocation_effect=allocation,
                selection_effect=selection,
                interaction_effect=interaction,
                total_effect=allocation + selection + interaction,
            ))

    logger.debug(f"Attributed {len(results)} segments "
                 f"({len(portfolio)} portfolio, {len(benchmark)} benchmark)")
    return results


def benchmark_total_return(segments: Iterable[SegmentData],
                           config: Optional[NumericConfig] = None) -> Decimal:
    """Weighted benchmark return: sum of weight * return over segments."""
    with numeric_context(config):
        return sum_decimals(seg.weight * seg.return_ for seg in segments)


def summarize_attribution(results: Iterable[BrinsonAttribution],
                          config: Optional[NumericConfig] = None) -> AttributionSummary:
    """Totals of each effect across segments."""
    rows = list(results)
    with numeric_context(config):
        return AttributionSummary(
            allocation_effect=sum_decimals(r.allocation_effect for r in rows),
            selection_effect=sum_decimals(r.selection_effect for r in rows),
            interaction_effect=sum_decimals(r.interaction_effect for r in rows),
            total_effect=sum_decimals(r.total_effect for r in rows),
            segment_count=len(rows),
        )


def calculate_contribution_to_return(positions: Iterable[PositionReturn],
                                     config: Optional[NumericConfig] = None) -> List[ContributionToReturn]:
    """
    Contribution of each position: beginning weight times its returns.

    The total contributions add up to the portfolio return when the weights
    are the true beginning weights; that is not checked here.
    """
    with numeric_context(config):
        return [
            ContributionToReturn(
                asset_id=pos.asset_id,
                ticker=pos.ticker,
                beginning_weight=pos.beginning_weight,
                position_return=pos.total_return,
                local_contribution=pos.beginning_weight * pos.local_return,
                fx_contribution=pos.beginning_weight * pos.fx_return,
                total_contribution=pos.beginning_weight * pos.total_return,
            )
            for pos in positions
        ]
