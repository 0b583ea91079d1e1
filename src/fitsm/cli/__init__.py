"""
Command-line interface for the FitSM vocabulary.

Entry point: ``fitsm`` (see :mod:`fitsm.cli.app`).
"""
