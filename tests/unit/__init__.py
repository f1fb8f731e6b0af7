"""Unit tests for individual components in isolation.

Coverage:
    - transcript/: Store mutators, open-message rule, observers
    - streaming/: Line decoding across frame boundaries, event reduction
    - client/: Configuration validation and request schema
    - ui/: Profile avatar persistence helpers
"""
