"""Fakes for the RESTlet domain."""

from suitelink.domains.restlet.fakes.transport import FakeTransport, RecordedRequest

__all__ = ["FakeTransport", "RecordedRequest"]
