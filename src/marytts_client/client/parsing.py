"""Decoders for the three response shapes: audio, MaryXML and line lists."""

import base64
import logging
import xml.etree.ElementTree as ET
from typing import Iterable, Optional

from marytts_client.client.models import PhonemeRecord, Voice
from marytts_client.core.constants import FALLBACK_CONTENT_TYPE
from marytts_client.core.exceptions import NoDataError

logger = logging.getLogger(__name__)


def to_data_uri(audio: bytes, content_type: Optional[str]) -> str:
    """Encode audio as ``data:<content-type>;base64,<payload>``."""
    payload = base64.b64encode(audio).decode("ascii")
    return f"data:{content_type or FALLBACK_CONTENT_TYPE};base64,{payload}"


def default_phoneme_map(words: Iterable[str]) -> dict[str, PhonemeRecord]:
    """One untranscribed record per distinct word."""
    return {word: PhonemeRecord() for word in words}


def _local_name(tag) -> str:
    # MaryXML declares a default namespace; match on the bare element name.
    if not isinstance(tag, str):
        return ""
    return tag.rsplit("}", 1)[-1]


def _first_child(element: ET.Element, name: str) -> Optional[ET.Element]:
    for child in element:
        if _local_name(child.tag) == name:
            return child
    return None


def parse_phonemes(xml_text: str, words: Iterable[str]) -> dict[str, PhonemeRecord]:
    """Fill a phoneme map for ``words`` from a PHONEMES MaryXML document.

    Walks maryxml -> p -> [voice] -> s and reads every ``t`` token below the
    sentence. Tokens whose trimmed text is not one of ``words`` are ignored,
    so punctuation the server splits off does not leak into the result.
    A word that appears in several tokens takes the first one.

    Raises:
        NoDataError: the document does not parse or lacks one of the
            expected elements.
    """
    table = default_phoneme_map(words)

    try:
        root = ET.fromstring(xml_text)
    except ET.ParseError as e:
        raise NoDataError(f"Malformed MaryXML: {e}") from e

    if _local_name(root.tag) != "maryxml":
        raise NoDataError(f"Unexpected root element: {_local_name(root.tag)}")

    node = _first_child(root, "p")
    if node is None:
        raise NoDataError("No paragraph in MaryXML")

    voice = _first_child(node, "voice")
    if voice is not None:
        node = voice

    sentence = _first_child(node, "s")
    if sentence is None:
        raise NoDataError("No sentence in MaryXML")

    tokens = [el for el in sentence.iter() if _local_name(el.tag) == "t"]
    if not tokens:
        raise NoDataError("No tokens in MaryXML sentence")

    filled = set()
    for token in tokens:
        word = "".join(token.itertext()).strip()
        record = table.get(word)
        # First token for a word wins
        if record is None or word in filled:
            continue
        filled.add(word)
        record.phonemes = token.get("ph", record.phonemes)
        record.method = token.get("g2p_method", record.method)
        record.part_of_speech = token.get("pos", record.part_of_speech)

    return table


def parse_voices(text: str) -> dict[str, Voice]:
    """Parse ``name locale gender type`` lines into a registry keyed by name."""
    voices: dict[str, Voice] = {}
    for line in text.splitlines():
        fields = line.split()
        if not fields:
            continue
        if len(fields) < 4:
            logger.warning(f"Skipping malformed voice line: {line.strip()!r}")
            continue
        name, locale, gender, voice_type = fields[:4]
        # First definition of a name wins
        voices.setdefault(
            name, Voice(name=name, locale=locale, gender=gender, type=voice_type)
        )
    return voices


def parse_locales(text: str) -> list[str]:
    """Non-empty lines, in server order."""
    return [line.strip() for line in text.splitlines() if line.strip()]
