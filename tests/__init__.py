"""ESI Utility test suite.

Folder taxonomy
- unit/         : Isolated, fast checks of a single module/function.
- functional/   : CLI subcommands exercised through Click's CliRunner.
- e2e/          : Full CLI runs, including logging and the flight recorder.

General guidance
- Keep unit fast and deterministic; inject clocks and environ mappings
  instead of patching globals.
- Functional asserts user-observable results (stdout, stderr, exit code).
- Property-based tests live with the layer they exercise and use @pytest.mark.property.
"""
