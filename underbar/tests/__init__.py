"""
Test suite for underbar.

Focus areas:
- reduce_ seeding and empty-input behavior
- filter_/reject partitioning
- Structural transforms (flatten, zip_, intersection, ...)
- Combinator state (once, memoize, throttle) and deferred execution
"""
