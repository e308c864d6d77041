"""
Support layer for shared statusflow utilities.

Provides data directory resolution and YAML workflow definition handling
used by the CLI and by callers seeding a fresh store.
"""
