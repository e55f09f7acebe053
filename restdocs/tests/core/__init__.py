"""Unit tests for core documentation logic.

These tests exercise the core without external dependencies.
All ports are replaced with in-memory fakes from tests/fakes/.
"""
