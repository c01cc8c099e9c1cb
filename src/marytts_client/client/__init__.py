"""HTTP client for the MaryTTS REST interface."""

from marytts_client.client.mary_client import MaryClient
from marytts_client.client.models import PhonemeRecord, Result, Voice
from marytts_client.client.options import (
    AudioFormat,
    InputType,
    OutputType,
    ProcessOptions,
)

__all__ = [
    "AudioFormat",
    "InputType",
    "MaryClient",
    "OutputType",
    "PhonemeRecord",
    "ProcessOptions",
    "Result",
    "Voice",
]
