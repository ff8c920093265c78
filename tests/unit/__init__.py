"""Unit tests.

Purpose
- Verify a single module/function in isolation.

Guidelines
- Filesystem tests use ``tmp_path``; nothing touches the real home directory.
- Prefer behavior-centric assertions over implementation details.
- Keep tests small, fast, and deterministic.
"""
