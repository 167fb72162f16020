"""
Integration tests for msethash: algebraic laws over every shipped group and
map-reduce folds of partial accumulators.
"""
