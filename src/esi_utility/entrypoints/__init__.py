"""Entrypoints for ESI Utility.

Expose the library to the outside world. Today that is the ``esi-utility``
command line: parse and validate inputs, call the library functions with
explicit settings, and present results.

Dependency rule: entrypoints import the library modules; library modules
never import from here.
"""
