"""
woo_optimizer.engine — Derivation of configuration values.

Modules:
  derive — ``derive(profile) -> DerivedSettings``; pure, total, no I/O.
  policy — Fixed tuning constants and the storage-class I/O capacity table.
"""
