"""Holds app package.

A hold reserves one room of a pricing unit for a customer for a short
window and locks the price the customer saw. Holds are created and
expired through `apps.holds.services.HoldManager`, which keeps the unit's
available count consistent with the holds taken against it.
"""
