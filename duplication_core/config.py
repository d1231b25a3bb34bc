"""
Duplication Detection Configuration

Centralized configuration for all thresholds, tokenizer toggles and weight
factors. Allows tuning without modifying code.
"""

import os
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from .constants import ConfigDefaults, WeightDefaults

# Debug mode - set DUPLICATION_DEBUG=1 to enable per-stage timing logs
DEBUG = os.environ.get('DUPLICATION_DEBUG', '').lower() in ('1', 'true', 'yes')

ENV_PREFIX = 'DUPLICATION_'


class WeightFactors(BaseModel):
    """Weights applied to the maintenance burden of each detection tier."""

    exact_duplication: float = Field(WeightDefaults.EXACT_DUPLICATION, ge=0.0, description="Weight for exact clusters")
    structural_similarity: float = Field(WeightDefaults.STRUCTURAL_SIMILARITY, ge=0.0, description="Weight for structural clusters")
    token_similarity: float = Field(WeightDefaults.TOKEN_SIMILARITY, ge=0.0, description="Weight for token clusters")
    cross_file_impact: float = Field(WeightDefaults.CROSS_FILE_IMPACT, ge=0.0, description="Reserved cross-file weight")
    maintenance_burden: float = Field(WeightDefaults.MAINTENANCE_BURDEN, ge=0.0, description="Global burden multiplier")

    model_config = {'frozen': True}

    def for_tier(self, tier: str) -> float:
        """Return the weight for a detection tier ('exact', 'structural' or 'token')."""
        return {
            'exact': self.exact_duplication,
            'structural': self.structural_similarity,
            'token': self.token_similarity,
        }.get(tier, 1.0)


class DuplicationConfig(BaseModel):
    """
    Thresholds and settings for duplication detection

    The engine only ever reads the instance it is given; loading values from
    the environment is left to the host tool via from_env().
    """

    min_lines: int = Field(ConfigDefaults.MIN_LINES, ge=1, description="Minimum block size in lines")
    min_tokens: int = Field(ConfigDefaults.MIN_TOKENS, ge=0, description="Reserved minimum token count")
    similarity_threshold: float = Field(
        ConfigDefaults.SIMILARITY_THRESHOLD, ge=0.0, le=1.0,
        description="Average content similarity required to keep a structural group"
    )
    token_similarity_threshold: float = Field(
        ConfigDefaults.TOKEN_SIMILARITY_THRESHOLD, ge=0.0, le=1.0,
        description="Jaccard similarity required for token duplicates"
    )
    max_distance: int = Field(ConfigDefaults.MAX_DISTANCE, ge=0, description="Reserved edit distance limit")
    ignore_whitespace: bool = Field(True, description="Collapse whitespace before comparison")
    ignore_comments: bool = Field(True, description="Strip // and /* */ comments before comparison")
    ignore_variable_names: bool = Field(False, description="Fold identifiers and literals to placeholders")
    enable_cross_file: bool = Field(True, description="Run cross-file consolidation analysis")
    report_top_n: int = Field(ConfigDefaults.REPORT_TOP_N, ge=0, description="Advisory cap on rendered clusters")
    weight_factors: WeightFactors = Field(default_factory=WeightFactors)
    max_workers: int = Field(
        ConfigDefaults.MAX_WORKERS, ge=1,
        description="Threads used to build token-tier candidates (1 = sequential)"
    )

    model_config = {
        'frozen': True,
        'json_schema_extra': {
            'example': {
                'min_lines': 6,
                'similarity_threshold': 0.85,
                'token_similarity_threshold': 0.75,
                'ignore_whitespace': True,
                'ignore_comments': True,
                'ignore_variable_names': False,
                'enable_cross_file': True,
                'report_top_n': 15,
            }
        }
    }

    @classmethod
    def from_env(cls, environ: Optional[Dict[str, str]] = None) -> 'DuplicationConfig':
        """Build a configuration from DUPLICATION_* environment variables."""
        env = os.environ if environ is None else environ
        defaults = cls()
        weights = defaults.weight_factors

        def get(name: str, default: Any) -> str:
            return env.get(f'{ENV_PREFIX}{name}', str(default))

        def get_bool(name: str, default: bool) -> bool:
            raw = env.get(f'{ENV_PREFIX}{name}')
            if raw is None:
                return default
            return raw.lower() in ('1', 'true', 'yes')

        return cls(
            min_lines=int(get('MIN_LINES', defaults.min_lines)),
            min_tokens=int(get('MIN_TOKENS', defaults.min_tokens)),
            similarity_threshold=float(get('SIMILARITY_THRESHOLD', defaults.similarity_threshold)),
            token_similarity_threshold=float(get('TOKEN_SIMILARITY_THRESHOLD', defaults.token_similarity_threshold)),
            max_distance=int(get('MAX_DISTANCE', defaults.max_distance)),
            ignore_whitespace=get_bool('IGNORE_WHITESPACE', defaults.ignore_whitespace),
            ignore_comments=get_bool('IGNORE_COMMENTS', defaults.ignore_comments),
            ignore_variable_names=get_bool('IGNORE_VARIABLE_NAMES', defaults.ignore_variable_names),
            enable_cross_file=get_bool('ENABLE_CROSS_FILE', defaults.enable_cross_file),
            report_top_n=int(get('REPORT_TOP_N', defaults.report_top_n)),
            max_workers=int(get('MAX_WORKERS', defaults.max_workers)),
            weight_factors=WeightFactors(
                exact_duplication=float(get('WEIGHT_EXACT', weights.exact_duplication)),
                structural_similarity=float(get('WEIGHT_STRUCTURAL', weights.structural_similarity)),
                token_similarity=float(get('WEIGHT_TOKEN', weights.token_similarity)),
                cross_file_impact=float(get('WEIGHT_CROSS_FILE', weights.cross_file_impact)),
                maintenance_burden=float(get('WEIGHT_MAINTENANCE', weights.maintenance_burden)),
            ),
        )

    def to_dict(self) -> dict:
        """Export configuration grouped by concern."""
        return {
            'blocks': {
                'min_lines': self.min_lines,
                'min_tokens': self.min_tokens,
            },
            'thresholds': {
                'similarity': self.similarity_threshold,
                'token_similarity': self.token_similarity_threshold,
                'max_distance': self.max_distance,
            },
            'tokenizer': {
                'ignore_whitespace': self.ignore_whitespace,
                'ignore_comments': self.ignore_comments,
                'ignore_variable_names': self.ignore_variable_names,
            },
            'analysis': {
                'enable_cross_file': self.enable_cross_file,
                'report_top_n': self.report_top_n,
                'max_workers': self.max_workers,
            },
            'weights': self.weight_factors.model_dump(),
            'debug': DEBUG,
        }
