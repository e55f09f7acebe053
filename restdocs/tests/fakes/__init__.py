"""Fake implementations of core ports for testing.

These in-memory implementations allow core documentation logic to be
tested without httpx or the filesystem:

- FakeContextProvider: Fixed test context with step counting
- FakeWriterResolver: Captured snippet contents
- PassthroughRequestConverter / PassthroughResponseConverter: Accept
  operation models as they are
"""

from .context import FakeContextProvider
from .converters import PassthroughRequestConverter, PassthroughResponseConverter
from .writer import FakeWriterResolver

__all__ = [
    "FakeContextProvider",
    "FakeWriterResolver",
    "PassthroughRequestConverter",
    "PassthroughResponseConverter",
]
