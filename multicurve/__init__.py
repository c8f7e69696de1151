"""
Multi-curve calibration engine.

Simultaneous calibration of interest-rate, issuer and inflation curves from
market instruments, organised as ordered blocks of square Newton problems,
with the Jacobian bookkeeping needed for market-quote sensitivities.
"""

__version__ = "0.1.0"
