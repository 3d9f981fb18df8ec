"""
Content access layer.

Design rules:
- Views call ONLY functions in this package.
- Every backend call fails soft: a broken or missing backend means empty
  sections, never an error on the page.
- No env var reads here (config-only).
"""
