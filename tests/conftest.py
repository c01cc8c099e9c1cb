"""Shared test fixtures for marytts-client."""

from unittest.mock import MagicMock

import pytest

from marytts_client.client.mary_client import MaryClient
from marytts_client.core.config import AppConfig, RequestDefaults, ServerConfig

PHONEMES_XML = """<?xml version="1.0" encoding="UTF-8"?>
<maryxml xmlns="http://mary.dfki.de/2002/MaryXML"
    xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"
    version="0.5" xml:lang="en-US">
<p>
<voice name="cmu-slt-hsmm">
<s>
<t g2p_method="lexicon" ph="' D I s" pos="DT">
this
</t>
<t g2p_method="lexicon" ph="' I z" pos="VBZ">
is
</t>
<t g2p_method="lexicon" ph="' @" pos="DT">
a
</t>
<t g2p_method="rules" ph="' t E s t" pos="NN">
test
</t>
<t pos=".">
.
</t>
</s>
</voice>
</p>
</maryxml>
"""


@pytest.fixture
def mock_config():
    """Minimal config for testing."""
    return AppConfig(
        server=ServerConfig(host="mary.test", port=59125, timeout=5),
        defaults=RequestDefaults(locale="en_US"),
        max_workers=2,
    )


@pytest.fixture
def client():
    mary = MaryClient(host="mary.test", port=59125, timeout=5)
    yield mary
    mary.cleanup()


@pytest.fixture
def make_response():
    """Build a fake requests.Response."""

    def _make(content=b"", status_code=200, reason="OK", headers=None):
        if isinstance(content, str):
            content = content.encode("utf-8")
        response = MagicMock()
        response.status_code = status_code
        response.reason = reason
        response.content = content
        response.headers = headers or {}
        return response

    return _make


@pytest.fixture
def phonemes_xml():
    return PHONEMES_XML
