"""
Consensus merge for enhanced scans.

Enhanced scans repeat the full pipeline and merge the runs here: numbers
are averaged, the status and per-query mention flags are majority votes,
and competitor and dimension lists are unioned. Merging identical runs
gives back the same result.
"""

import logging
from collections import Counter
from typing import Callable, Dict, List, Optional, TypeVar

from models.schemas import (
    CompetitorResult,
    DimensionScore,
    QueryTestRecord,
    ScanResult,
    ScoreBreakdown,
    SourceResult,
    VisibilityScore
)
from utils.helpers import round_half_up

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _mean(values: List[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def _mean_int(values: List[float]) -> int:
    return int(round_half_up(_mean(values)))


def _majority(values: List[T]) -> T:
    """Most common value; ties go to the value seen first."""
    counts = Counter(values)
    best = max(counts.values())
    return next(value for value in values if counts[value] == best)


def _union_by(items_per_run: List[List[T]], key: Callable[[T], str]) -> Dict[str, List[T]]:
    """Group items from every run by key, keeping first-seen order."""
    grouped: Dict[str, List[T]] = {}
    for items in items_per_run:
        for item in items:
            grouped.setdefault(key(item), []).append(item)
    return grouped


def _merge_score(scores: List[VisibilityScore]) -> VisibilityScore:
    positions = [s.breakdown.avg_position for s in scores if s.breakdown.avg_position is not None]

    by_model: Dict[str, int] = {}
    for model, values in _union_by([list(s.by_model.items()) for s in scores], key=lambda item: item[0]).items():
        by_model[model] = _mean_int([value for _, value in values])

    by_dimension = []
    for entries in _union_by([s.by_dimension for s in scores], key=lambda d: str(d.dimension.value).lower()).values():
        by_dimension.append(DimensionScore(
            dimension=entries[0].dimension,
            label=entries[0].label,
            score=_mean_int([d.score for d in entries]),
            queries_count=_mean_int([d.queries_count for d in entries]),
            mention_count=_mean_int([d.mention_count for d in entries])
        ))

    return VisibilityScore(
        overall=_mean_int([s.overall for s in scores]),
        breakdown=ScoreBreakdown(
            mention_rate=_mean_int([s.breakdown.mention_rate for s in scores]),
            avg_position=round_half_up(_mean(positions), 1) if positions else None,
            top_three_rate=_mean_int([s.breakdown.top_three_rate for s in scores]),
            model_consistency=_mean_int([s.breakdown.model_consistency for s in scores])
        ),
        by_model=by_model,
        by_dimension=by_dimension
    )


def _merge_sources(results: List[ScanResult]) -> Dict[str, SourceResult]:
    merged = {}
    for name, entries in _union_by([list(r.sources.items()) for r in results], key=lambda item: item[0]).items():
        sources = [source for _, source in entries]
        mention_count = _mean_int([s.mention_count for s in sources])
        top_three_count = _mean_int([s.top_three_count for s in sources])

        position = "not_found"
        if mention_count:
            position = "top_3" if top_three_count else "mentioned"

        # Descriptive fields come from the first run that saw the brand
        reference = next((s for s in sources if s.mentioned), sources[0])
        merged[name] = reference.model_copy(update={
            "mentioned": mention_count > 0,
            "position": position,
            "mention_count": mention_count,
            "top_three_count": top_three_count,
            "total_queries": _mean_int([s.total_queries for s in sources])
        })
    return merged


def _merge_position(flag: bool, positions: List[Optional[int]]) -> Optional[int]:
    known = [p for p in positions if p is not None]
    if not flag or not known:
        return None
    return _mean_int(known)


def _merge_queries(results: List[ScanResult]) -> List[QueryTestRecord]:
    run_count = len(results)
    query_count = min(len(r.queries_tested) for r in results)

    merged = []
    for index in range(query_count):
        records = [r.queries_tested[index] for r in results]
        chatgpt = sum(1 for record in records if record.chatgpt) >= run_count / 2
        claude = sum(1 for record in records if record.claude) >= run_count / 2
        merged.append(records[0].model_copy(update={
            "chatgpt": chatgpt,
            "claude": claude,
            "chatgpt_position": _merge_position(chatgpt, [r.chatgpt_position for r in records if r.chatgpt]),
            "claude_position": _merge_position(claude, [r.claude_position for r in records if r.claude])
        }))
    return merged


def _merge_competitors(results: List[ScanResult]) -> List[CompetitorResult]:
    merged = []
    grouped = _union_by([r.competitor_results for r in results], key=lambda c: c.name.lower())
    for entries in grouped.values():
        mention_count = _mean_int([c.mention_count for c in entries])
        merged.append(entries[0].model_copy(update={
            "mentioned": mention_count > 0,
            "mention_count": mention_count,
            "top_three_count": _mean_int([c.top_three_count for c in entries]),
            "total_queries": _mean_int([c.total_queries for c in entries]),
            "visibility_level": _majority([c.visibility_level for c in entries]),
            "outranks_user": sum(1 for c in entries if c.outranks_user) >= len(entries) / 2,
            "description": next((c.description for c in entries if c.description), None)
        }))
    return merged


def average_scan_results(results: List[ScanResult]) -> ScanResult:
    """
    Merge the results of repeated scans of the same input.

    Only runs that completed are merged; failed runs contribute their
    errors. Signals, actions, raw responses and the not-mentioned
    explanation are taken from the first merged run. The merged scan is
    complete when at least one run completed.

    Raises:
        ValueError: no results to merge
    """
    if not results:
        raise ValueError("No scan results to merge")
    if len(results) == 1:
        return results[0]

    finished = [r for r in results if r.scan_state == "complete"]
    scored = finished or results
    first = scored[0]
    statuses = [r.status for r in scored]
    status = _majority(statuses)

    errors: List[str] = []
    for result in results:
        errors.extend(error for error in result.errors if error not in errors)

    if len(scored) < len(results):
        logger.warning(f"⚠️ {len(results) - len(scored)} of {len(results)} runs failed, merging {len(scored)}")
    logger.info(f"📊 Merging {len(scored)} runs (statuses: {', '.join(statuses)})")

    return first.model_copy(update={
        "status": status,
        "scan_state": "complete" if finished else "failed",
        "visibility_score": _merge_score([r.visibility_score for r in scored]),
        "sources": _merge_sources(scored),
        "queries_tested": _merge_queries(scored),
        "competitor_results": _merge_competitors(scored),
        "errors": errors
    })
