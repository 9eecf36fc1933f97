"""
Recommendation lists shipped alongside the generated documents.

Modules
-------
catalog : build_recommendations() + the fixed monitoring / maintenance /
          WooCommerce / database lists — pure functions, no I/O.
"""
