"""The ``sundries`` command-line interface."""
