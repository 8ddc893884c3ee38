"""Pricing app package.

This app encapsulates nightly rate computation: the pure price model and
its profiles, the periodic recompute sweep driven by Celery beat, and the
admin override path. All price writes go through the inventory ledger and
leave an audit row behind.
"""
