#!/usr/bin/env python3
"""
Test suite configuration and utilities.

All tests run offline: the external scoring provider, Redis and the clock are
replaced with the mocks in tests/mocks.

    # Run all tests
    python -m pytest tests/ -v

    # Run only core unit tests
    python -m pytest tests/unit/core -v
"""
