"""Shared pytest fixtures and configuration for the cargo-cmdline test suite.

Guidelines
----------
* No Rust toolchain is required; cargo/rustup lookups are mocked.
* Core tests must be pure — no side effects.
* Tests must not depend on OS state.
"""

from __future__ import annotations
