"""
Core value types, precision-safe decimal arithmetic, and number formatting.

Everything here is a pure function of its inputs: no I/O, no shared state.
"""
