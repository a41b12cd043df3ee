"""Application modules.

Each sub-package groups one domain concept: its entity, table, repository,
factory, seeder and routes. Modules are discovered from this directory by
``src.garage.core.module_registry``.
"""
