"""Player Catalog Package: game character records over HTTP.

Invariants:
    - Package root contains no executable code (no import side-effects)
"""
