"""Bakery timekeeping package.

Feature modules (shifts, attendance, leaves, ...) sit behind a thin Flask
controller layer, with services depending on repository protocols and MySQL
implementations wired together in ``container.py``.
"""
