"""Inventory app package.

This app owns the pricing units of the motel: one row per bookable room
type and pricing period, with its current price and remaining room count.
All reads and writes that must stay consistent under concurrent recompute
and booking go through `apps.inventory.ledger`.
"""
