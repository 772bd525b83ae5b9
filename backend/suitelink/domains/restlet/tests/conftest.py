"""RESTlet domain test fixtures.

Provides fixed credentials, a fake transport, a recording sleep and a client
wired to a deterministic signer.
"""

import pytest

from suitelink.core.logging import logger
from suitelink.domains.restlet.client import RestletClient
from suitelink.domains.restlet.executor import RequestExecutor
from suitelink.domains.restlet.fakes import FakeTransport
from suitelink.domains.restlet.tests._helpers import (
    RecordingSleep,
    fixed_signer,
    make_credentials,
)
from suitelink.domains.restlet.types import Credentials


@pytest.fixture
def credentials() -> Credentials:
    return make_credentials()


@pytest.fixture
def fake_transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def recording_sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def executor(fake_transport, recording_sleep) -> RequestExecutor:
    return RequestExecutor(
        fake_transport,
        timeout=1.0,
        sleep=recording_sleep,
        logger=logger.with_context(request_id="test-restlet"),
    )


@pytest.fixture
def client(credentials, executor) -> RestletClient:
    return RestletClient(credentials, signer=fixed_signer(), executor=executor)
