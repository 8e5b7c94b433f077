"""Benchmark execution pipeline (checkout, patch, build/run, collection).

Modules:
    - executor: BenchmarkRunner class
    - results: ResultStore matrix
    - git: Working tree checkout and patch application
    - cargo: Lockfile refresh, CI config artifact and example runs
"""
