"""Implementation package of robustpred.

Modules, leaves first: ``constants`` (float formats, error bounds), ``eft``
(error-free transformations), ``expansion`` (expansion algebra), ``exact``
and ``adaptive`` (the predicates), ``batch`` (array front end) and ``stats``
(stage counters). The flat ``robustpred`` namespace is the stable surface.
"""
