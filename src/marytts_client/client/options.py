"""Closed option sets and the request descriptor sent to /process."""

import logging
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from marytts_client.core.constants import DEFAULT_LOCALE

logger = logging.getLogger(__name__)


class _WireEnum(str, Enum):
    """Enum whose values are the upper-case tokens the server expects.

    Callers name members by their lower-case key (``"phonemes"``), by the
    wire token, or by the member itself. ``resolve`` is the one place where
    anything else is replaced by the enum's default.
    """

    @property
    def key(self) -> str:
        return self.value.lower()

    @classmethod
    def keys(cls) -> list[str]:
        return [member.key for member in cls]

    @classmethod
    def default(cls) -> "_WireEnum":
        return _DEFAULTS[cls]

    @classmethod
    def resolve(cls, value: Any) -> "_WireEnum":
        """Map a caller-supplied value to a member, falling back to the default."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            member = cls.__members__.get(value.upper())
            if member is not None:
                return member
        if value is not None:
            logger.debug(f"Unknown {cls.__name__} {value!r}, using {cls.default().key}")
        return cls.default()


class InputType(_WireEnum):
    TEXT = "TEXT"
    SIMPLEPHONEMES = "SIMPLEPHONEMES"
    SABLE = "SABLE"
    SSML = "SSML"
    APML = "APML"
    EMOTIONML = "EMOTIONML"
    RAWMARYXML = "RAWMARYXML"
    TOKENS = "TOKENS"
    WORDS = "WORDS"
    PARTSOFSPEECH = "PARTSOFSPEECH"
    PHONEMES = "PHONEMES"
    INTONATION = "INTONATION"
    ALLOPHONES = "ALLOPHONES"
    ACOUSTPARAMS = "ACOUSTPARAMS"


class OutputType(_WireEnum):
    RAWMARYXML = "RAWMARYXML"
    TOKENS = "TOKENS"
    WORDS = "WORDS"
    PARTSOFSPEECH = "PARTSOFSPEECH"
    PHONEMES = "PHONEMES"
    INTONATION = "INTONATION"
    ALLOPHONES = "ALLOPHONES"
    ACOUSTPARAMS = "ACOUSTPARAMS"
    TARGETFEATURES = "TARGETFEATURES"
    AUDIO = "AUDIO"
    HALFPHONE_TARGETFEATURES = "HALFPHONE_TARGETFEATURES"
    REALISED_ACOUSTPARAMS = "REALISED_ACOUSTPARAMS"
    REALISED_DURATIONS = "REALISED_DURATIONS"
    PRAAT_TEXTGRID = "PRAAT_TEXTGRID"


class AudioFormat(_WireEnum):
    WAVE_FILE = "WAVE_FILE"
    AU_FILE = "AU_FILE"
    AIFF_FILE = "AIFF_FILE"


# Fallback member for each option set
_DEFAULTS = {
    InputType: InputType.TEXT,
    OutputType: OutputType.AUDIO,
    AudioFormat: AudioFormat.WAVE_FILE,
}


class ProcessOptions(BaseModel):
    """Options for a /process call.

    Invalid enum values become defaults; unknown keys are rejected. The
    camelCase names (``inputType``, ``outputType``) are accepted as well.
    """
    model_config = ConfigDict(populate_by_name=True, extra="forbid")

    input_type: InputType = Field(default=InputType.TEXT, alias="inputType")
    output_type: OutputType = Field(default=OutputType.AUDIO, alias="outputType")
    locale: str = DEFAULT_LOCALE
    audio: AudioFormat = AudioFormat.WAVE_FILE
    voice: Optional[str] = None
    base64: bool = Field(
        default=False,
        description="Return audio as a data URI instead of raw bytes",
    )

    @field_validator("input_type", mode="before")
    @classmethod
    def _resolve_input_type(cls, value: Any) -> InputType:
        return InputType.resolve(value)

    @field_validator("output_type", mode="before")
    @classmethod
    def _resolve_output_type(cls, value: Any) -> OutputType:
        return OutputType.resolve(value)

    @field_validator("audio", mode="before")
    @classmethod
    def _resolve_audio(cls, value: Any) -> AudioFormat:
        return AudioFormat.resolve(value)

    @field_validator("locale", mode="before")
    @classmethod
    def _default_locale(cls, value: Any) -> Any:
        return value or DEFAULT_LOCALE

    @field_validator("voice", mode="before")
    @classmethod
    def _drop_empty_voice(cls, value: Any) -> Any:
        return value or None

    @property
    def wants_audio(self) -> bool:
        return self.output_type is OutputType.AUDIO


class ProcessRequest(BaseModel):
    """Text plus resolved options, built fresh for every call."""
    text: str
    options: ProcessOptions = Field(default_factory=ProcessOptions)

    def form_data(self) -> dict[str, str]:
        """Form fields for POST /process."""
        data = {
            "INPUT_TEXT": self.text,
            "INPUT_TYPE": self.options.input_type.value,
            "OUTPUT_TYPE": self.options.output_type.value,
            "LOCALE": self.options.locale,
            "AUDIO": self.options.audio.value,
        }
        if self.options.voice:
            data["VOICE"] = self.options.voice
        return data
