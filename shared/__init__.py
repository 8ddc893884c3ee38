"""
Shared Kernel

Pieces every pricing and hold module leans on: the domain error taxonomy,
value-object base class and the DRF exception handler that renders errors.
"""
