"""
Tests package for msethash

- Unit tests: groups, hash-to-group embeddings, digests and accumulators in isolation
- Integration tests: algebraic laws across every shipped group and parallel folds
"""
