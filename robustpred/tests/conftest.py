import logging

import numpy as np
import pytest

from robustpred.core.constants import FLOAT32, FLOAT64
from robustpred.core.expansion import ExpansionArithmetic, arithmetic_for


@pytest.fixture(autouse=True)
def restore_package_loggers():
    """Put the 'robustpred' loggers back the way the test found them.

    configure_logging() mutates the package logger (handlers, level,
    propagation), which would otherwise leak into later tests.
    """
    names = ('robustpred', 'robustpred.core.adaptive')
    saved = {}
    for name in names:
        log = logging.getLogger(name)
        saved[name] = (list(log.handlers), log.level, log.propagate)
    try:
        yield
    finally:
        for name, (handlers, level, propagate) in saved.items():
            log = logging.getLogger(name)
            for h in list(log.handlers):
                log.removeHandler(h)
            for h in handlers:
                log.addHandler(h)
            log.setLevel(level)
            log.propagate = propagate


@pytest.fixture
def rng():
    return np.random.default_rng(20240611)


@pytest.fixture(params=['float64', 'float64-dekker', 'float32'])
def engine(request):
    """Every arithmetic engine the predicates can run on."""
    if request.param == 'float64':
        return arithmetic_for(FLOAT64)
    if request.param == 'float64-dekker':
        return ExpansionArithmetic(FLOAT64, use_fma=False)
    return arithmetic_for(FLOAT32)
