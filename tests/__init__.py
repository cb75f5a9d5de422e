#!/usr/bin/env python3
"""
Test suite for JobTrack.

No external services are needed: Redis, the job board and the OpenAI API are
mocked. Run with:

    python -m pytest tests/ -v

Shared fakes live in tests/mocks/, shared fixtures in tests/conftest.py.
"""
