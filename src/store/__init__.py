"""Storage and versioning layer.

This module persists BOM revisions on an injected storage medium.
It enforces per-serial-number version uniqueness for the SDK.
"""
