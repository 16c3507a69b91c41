"""
Test suites package.

Kept importable so that programmatic runners (`run_tests.py`) and IDE
navigation can resolve test modules.
"""
