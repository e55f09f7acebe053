"""Test suite for httpx-restdocs.

Organized into three categories:

1. core/: Unit tests for snippets, preprocessors and the generator
   - No third-party dependencies, fast execution
   - Uses in-memory fakes for ports

2. adapters/: Integration tests for the httpx hooks, writer and plugin
   - Drives a FastAPI test application through real httpx clients
   - Validates written snippets and error wrapping

3. fakes/: Port implementations for testing
   - In-memory context provider, snippet writer and converters
"""
