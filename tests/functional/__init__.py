"""Functional tests.

Purpose
- Drive each ``esi-utility`` subcommand the way a user would from a shell.

Guidelines
- Treat the CLI as a black box; assert on output and exit status only.
- Build inputs (directories, images) in ``tmp_path`` rather than mocking.
- One user story per test class; one behaviour per test.
"""
