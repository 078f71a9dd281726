"""Entrypoints for SUNDRIES.

Expose the helpers to the outside world. Parse and validate inputs, call the
library functions, and present results. Nothing in the library imports from
here.
"""
