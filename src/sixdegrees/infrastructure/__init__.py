"""Infrastructure layer — graph store, snapshot cache, catalog adapters.

This layer depends on stdlib, the domain models, and third-party libs
(NetworkX, pydantic). It must never import from services, commands, or output.
"""
