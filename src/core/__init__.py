"""
Core domain models, mathematical primitives, and invariants.

Stateless risk and interest-rate math for lending reserves: every
function is a deterministic transform of its arguments with no I/O.
"""
