"""Result types returned by the client."""

from dataclasses import dataclass
from typing import Generic, Optional, TypeVar, Union

from pydantic import BaseModel

from marytts_client.core.constants import UNKNOWN
from marytts_client.core.exceptions import MaryTTSError

T = TypeVar("T")


class PhonemeRecord(BaseModel):
    """Transcription of one word. ``phonemes`` stays False until the server fills it."""
    phonemes: Union[str, bool] = False
    method: str = UNKNOWN
    part_of_speech: str = UNKNOWN


class Voice(BaseModel):
    """A voice installed on the server."""
    name: str
    locale: str
    gender: str
    type: str


@dataclass
class Result(Generic[T]):
    """Outcome of one client call.

    ``value`` is always usable: on failure it holds the fallback the call
    settles with (an empty registry, the default phoneme map, ...) and
    ``error`` says what went wrong.
    """
    value: Optional[T] = None
    error: Optional[MaryTTSError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> T:
        """Return the value, raising the error if the call failed."""
        if self.error is not None:
            raise self.error
        return self.value
