"""Public package API of robustpred: exact-sign geometric predicates.

    from robustpred import orient2d, incircle

    orient2d((0.0, 0.0), (1.0, 0.0), (1.0, 1.0))   # > 0, counter-clockwise

``orient2d``, ``orient3d``, ``incircle`` and ``insphere`` return a float whose
sign is the exact sign of the corresponding determinant for any finite
float64 or float32 input. The ``*_batch`` variants take arrays of points.
The implementation modules live in ``robustpred.core`` and may change; rely
on this layer for public symbols.
"""
from importlib import import_module as _imp
import logging as _logging

from importlib.metadata import version as _pkg_version, PackageNotFoundError as _NotFound

try:
    __version__ = _pkg_version("robustpred")
except _NotFound:  # pragma: no cover - source checkout without metadata
    __version__ = "0.0.0+dev"

_logging.getLogger(__name__).addHandler(_logging.NullHandler())

_const = _imp('robustpred.core.constants')
_config = _imp('robustpred.core.config')
_eft = _imp('robustpred.core.eft')
_expansion = _imp('robustpred.core.expansion')
_exact = _imp('robustpred.core.exact')
_adaptive = _imp('robustpred.core.adaptive')
_batch = _imp('robustpred.core.batch')
_stats = _imp('robustpred.core.stats')
_log = _imp('robustpred.core.logging_utils')

# Predicates
orient2d = _adaptive.orient2d
orient3d = _adaptive.orient3d
incircle = _adaptive.incircle
insphere = _adaptive.insphere
orient2d_exact = _adaptive.orient2d_exact_sign
orient3d_exact = _adaptive.orient3d_exact_sign
incircle_exact = _adaptive.incircle_exact_sign
insphere_exact = _adaptive.insphere_exact_sign
orient2d_batch = _batch.orient2d_batch
orient3d_batch = _batch.orient3d_batch
incircle_batch = _batch.incircle_batch
insphere_batch = _batch.insphere_batch

# Arithmetic engine and formats
ArithmeticConfig = _config.ArithmeticConfig
HAS_FMA = _config.HAS_FMA
ExpansionArithmetic = _expansion.ExpansionArithmetic
Expansion = _expansion.Expansion
arithmetic_for = _expansion.arithmetic_for
FLOAT64 = _const.FLOAT64
FLOAT32 = _const.FLOAT32
UnsupportedFloatTypeError = _const.UnsupportedFloatTypeError
error_bounds = _const.error_bounds

# Stage statistics and logging
Stage = _stats.Stage
StageStats = _stats.StageStats
record_stages = _stats.record_stages
format_stats_table = _stats.format_stats_table
configure_logging = _log.configure_logging

# Namespace submodules
constants = _const
eft = _eft
expansion = _expansion
exact = _exact
adaptive = _adaptive
batch = _batch
stats = _stats

__all__ = [
    '__version__',
    # predicates
    'orient2d', 'orient3d', 'incircle', 'insphere',
    'orient2d_exact', 'orient3d_exact', 'incircle_exact', 'insphere_exact',
    'orient2d_batch', 'orient3d_batch', 'incircle_batch', 'insphere_batch',
    # engine
    'ArithmeticConfig', 'HAS_FMA', 'ExpansionArithmetic', 'Expansion', 'arithmetic_for',
    'FLOAT64', 'FLOAT32', 'UnsupportedFloatTypeError', 'error_bounds',
    # stats / logging
    'Stage', 'StageStats', 'record_stages', 'format_stats_table', 'configure_logging',
    # submodules
    'constants', 'eft', 'expansion', 'exact', 'adaptive', 'batch', 'stats',
]
