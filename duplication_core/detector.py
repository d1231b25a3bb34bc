"""
Duplication Detection Pipeline

Entry point of the engine. One call takes the parsed inventory of a
codebase and returns a complete DuplicationMetrics result:

Stage 1: Extract code blocks from functions and class methods
Stage 2: Find exact, structural and token duplicate groups
Stage 3: Score groups into clusters
Stage 4: Cross-file consolidation analysis (optional)
Stage 5: Per-file rollups
Stage 6: Consolidation opportunities
Stage 7: Impact analysis and hotspots
Stage 8: Aggregate metrics, recommendations and summary

Also runnable as `python -m duplication_core`, reading a JSON list of parse
results (or {"parse_results": [...], "config": {...}}) from stdin and
writing the metrics JSON to stdout.
"""

import json
import logging
import sys
from typing import Any, Dict, Optional, Sequence

from . import config as config_module
from .analyzers import (
    analyze_cross_file_duplication,
    analyze_impact,
    calculate_aggregate_metrics,
    calculate_file_metrics,
    cluster_duplicates,
    generate_consolidation_opportunities,
    generate_recommendations,
    generate_summary,
)
from .config import DuplicationConfig
from .errors import DuplicationError, EmptyInputError
from .extractors import coerce_parse_results, extract_code_blocks
from .extractors.extract_blocks import ParseRecord
from .models import DetectionTier, DuplicationMetrics
from .similarity import find_exact_duplicates, find_structural_duplicates, find_token_duplicates
from .similarity.lexer import Lexer, RegexLexer
from .utils.timing import StageTimings

logger = logging.getLogger(__name__)


class DuplicationDetector:
    """
    Runs the detection pipeline with a fixed configuration and lexer.

    The detector holds no per-run state; detect() can be called repeatedly
    and from several threads.
    """

    def __init__(
        self,
        config: Optional[DuplicationConfig] = None,
        lexer: Optional[Lexer] = None,
        debug: Optional[bool] = None
    ) -> None:
        self.config = config or DuplicationConfig()
        self.lexer = lexer or RegexLexer(self.config)
        self.debug = config_module.DEBUG if debug is None else debug

    def detect(self, parse_results: Sequence[ParseRecord]) -> DuplicationMetrics:
        """
        Analyze a codebase for duplication.

        Args:
            parse_results: Per-file parse records, as ParseResult models or dicts

        Returns:
            DuplicationMetrics for the whole input

        Raises:
            EmptyInputError: If parse_results is empty
            pydantic.ValidationError: If a parse record dict is malformed
        """
        records = coerce_parse_results(parse_results)
        if not records:
            raise EmptyInputError()

        timings = StageTimings(enabled=self.debug)
        config = self.config

        with timings.stage('extract'):
            blocks = extract_code_blocks(records, config, self.lexer)

        with timings.stage('find'):
            exact_groups = find_exact_duplicates(blocks, config)
            structural_groups = find_structural_duplicates(blocks, config)
            token_groups = find_token_duplicates(blocks, config)

        with timings.stage('cluster'):
            exact = cluster_duplicates(exact_groups, DetectionTier.EXACT, config, self.lexer)
            structural = cluster_duplicates(structural_groups, DetectionTier.STRUCTURAL, config, self.lexer)
            token = cluster_duplicates(token_groups, DetectionTier.TOKEN, config, self.lexer)
        all_clusters = [*exact, *structural, *token]

        with timings.stage('cross_file'):
            if config.enable_cross_file:
                cross_file = analyze_cross_file_duplication(all_clusters)
            else:
                cross_file = []

        with timings.stage('files'):
            duplication_by_file = calculate_file_metrics(records, all_clusters)

        with timings.stage('consolidation'):
            opportunities = generate_consolidation_opportunities(all_clusters)

        with timings.stage('impact'):
            impact = analyze_impact(all_clusters, duplication_by_file)

        with timings.stage('summary'):
            aggregate = calculate_aggregate_metrics(all_clusters, duplication_by_file)
            recommendations = generate_recommendations(exact, structural, cross_file)
            summary = generate_summary(aggregate, all_clusters, opportunities, recommendations)

        logger.debug(
            "Analyzed %d files, %d blocks: %d exact, %d structural, %d token clusters",
            len(records), len(blocks), len(exact), len(structural), len(token),
        )
        timings.log_summary(logger)

        metrics = DuplicationMetrics(
            overall_score=aggregate.overall_score,
            total_duplicated_lines=aggregate.total_duplicated_lines,
            duplication_ratio=aggregate.duplication_ratio,
            exact_duplicates=exact,
            structural_duplicates=structural,
            token_duplicates=token,
            cross_file_duplicates=cross_file,
            duplication_by_file=duplication_by_file,
            consolidation_opportunities=opportunities,
            impact_analysis=impact,
            recommendations=recommendations,
            summary=summary,
        )

        for cluster in metrics.top_clusters(config.report_top_n):
            logger.debug(
                "Top cluster %s: %d instances, burden %.1f, priority %s",
                cluster.id, cluster.instance_count, cluster.maintenance_burden, cluster.priority.value,
            )

        return metrics


def detect_duplication(
    parse_results: Sequence[ParseRecord],
    config: Optional[DuplicationConfig] = None
) -> DuplicationMetrics:
    """Run the detection pipeline once with the given configuration."""
    return DuplicationDetector(config).detect(parse_results)


def _parse_payload(payload: Any) -> Dict[str, Any]:
    if isinstance(payload, list):
        return {'parse_results': payload, 'config': None}
    if isinstance(payload, dict) and 'parse_results' in payload:
        return {'parse_results': payload['parse_results'], 'config': payload.get('config')}
    raise DuplicationError("expected a list of parse results or an object with 'parse_results'")


def main():
    """
    Run detection on JSON from stdin and write the metrics JSON to stdout.

    Without a config in the payload, DUPLICATION_* environment variables
    are used.
    """
    try:
        payload = _parse_payload(json.load(sys.stdin))

        if payload['config'] is not None:
            config = DuplicationConfig.model_validate(payload['config'])
        else:
            config = DuplicationConfig.from_env()

        metrics = detect_duplication(payload['parse_results'], config)

        sys.stdout.write(metrics.to_json(indent=2))
        sys.stdout.write('\n')

    except Exception as e:
        print(f"Error in duplication detection: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
