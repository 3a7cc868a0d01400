"""
Avatar Compatibility Matching Engine

This package scores how well two independently authored avatar descriptions
correspond to the same real person. A producer describes someone they
noticed; a consumer compares that description against their own avatar.

Key Design Decisions:
- Descriptors are flat attribute -> value mappings, looked up in fixed tables
- Partial credit (0.7) for related values in the same similarity group
- Primary (identity) and secondary (clothing, accessories) sets are scored
  separately and combined with configurable weights
- The engine is pure and deterministic: no state, no I/O, no learned weights
"""

__version__ = "1.0.0"
