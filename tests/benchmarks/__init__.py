"""
Throughput benchmarks.

These run the hot loops many times and report steps per second. They
assert only that the state stays finite, so they are safe to run in CI.
"""

__all__: list[str] = []
