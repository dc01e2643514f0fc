"""
Core utilities shared across the front desk package.

Configuration (env vars, storage paths) and logging setup live here so that
services and adapters depend on core primitives instead of reading the
environment themselves.
"""
