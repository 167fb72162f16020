"""
Unit tests for msethash components

- test_groups.py: group arithmetic, encoding and validation
- test_hash_to_group.py: element embeddings
- test_multiset.py: immutable digest values
- test_accumulator.py: mutable accumulator
- test_params.py: group registry and parameter files
- test_config.py / test_logging_config.py: settings and logging
"""
