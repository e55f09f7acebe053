"""External adapters for httpx-restdocs.

This package contains all external dependencies (httpx, pytest, the
filesystem) and provides implementations of the core port interfaces.

Adapter Organization:

- httpx/: Converters and event hooks for httpx clients
- writer/: Snippet persistence on the local filesystem
- pytest/: Fixtures managing the documentation context of each test
"""
