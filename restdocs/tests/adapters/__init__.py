"""Integration tests for adapter implementations.

These tests exercise the httpx hooks against a FastAPI application
and check the snippet files they produce.
"""
