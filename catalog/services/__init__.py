"""Services Layer: async use cases orchestrating the pure core and the repository.

Invariants:
    - Services never build SQL; storage is reached only through PlayerRepository
"""
