"""Command-line front end (``esi-utility``)."""
