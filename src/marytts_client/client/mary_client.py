"""HTTP client for a MaryTTS server."""

import logging
import re
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Iterable, Optional, Union

import requests
from pydantic import ValidationError

from marytts_client.client.models import PhonemeRecord, Result, Voice
from marytts_client.client.options import (
    AudioFormat,
    InputType,
    OutputType,
    ProcessOptions,
    ProcessRequest,
)
from marytts_client.client.parsing import (
    default_phoneme_map,
    parse_locales,
    parse_phonemes,
    parse_voices,
    to_data_uri,
)
from marytts_client.core.constants import (
    DEFAULT_HOST,
    DEFAULT_LOCALE,
    DEFAULT_MAX_WORKERS,
    DEFAULT_PORT,
    DEFAULT_TIMEOUT,
    ENDPOINT_LOCALES,
    ENDPOINT_PROCESS,
    ENDPOINT_VERSION,
    ENDPOINT_VOICES,
)
from marytts_client.core.exceptions import (
    ClientClosedError,
    InvalidOptionsError,
    MaryTTSError,
    NoDataError,
    ProtocolError,
    TransportError,
)

logger = logging.getLogger(__name__)

_SCHEME = re.compile(r"^https?://")

Callback = Callable[[Result], Any]


def build_base_url(host: Optional[str] = None, port: Optional[int] = None) -> str:
    """Return ``scheme://host:port/``, adding ``http://`` when no scheme is given."""
    url = f"{(host or DEFAULT_HOST).rstrip('/')}:{port or DEFAULT_PORT}/"
    return url if _SCHEME.match(url) else f"http://{url}"


def _decode_text(response: requests.Response) -> str:
    return response.content.decode("utf-8", errors="replace")


def _build_request(text: str, options: Optional[Union[ProcessOptions, dict]]) -> ProcessRequest:
    try:
        return ProcessRequest(
            text=text,
            options=options if options is not None else ProcessOptions(),
        )
    except ValidationError as e:
        logger.error(f"Invalid process options: {e}")
        raise InvalidOptionsError(str(e)) from e


def _emit(values: list[str], callback: Optional[Callable[[list[str]], Any]]) -> list[str]:
    if callable(callback):
        callback(values)
    return values


class MaryClient:
    """Client for the MaryTTS REST interface.

    Every network method returns a ``Future`` that resolves to a ``Result``
    and, when ``callback`` is given, calls it once with the same ``Result``.
    Calls never raise: failures are logged and reported in ``Result.error``
    while ``Result.value`` carries the fallback value.
    """

    def __init__(
        self,
        host: str = DEFAULT_HOST,
        port: int = DEFAULT_PORT,
        timeout: float = DEFAULT_TIMEOUT,
        max_workers: int = DEFAULT_MAX_WORKERS,
    ):
        self.base_url = build_base_url(host, port)
        self.timeout = timeout
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="marytts"
        )

    # ---- Public API ----

    def process(
        self,
        text: str,
        options: Optional[Union[ProcessOptions, dict]] = None,
        callback: Optional[Callback] = None,
    ) -> "Future[Result[Union[bytes, str]]]":
        """Process ``text`` on the server.

        Audio output resolves to ``bytes`` (or a data URI string when
        ``options.base64`` is set); every other output type resolves to the
        response body as text, unparsed.
        """
        try:
            request = _build_request(text, options)
        except InvalidOptionsError as e:
            return self._settled(Result(error=e), callback)
        return self._submit(self._run_process, callback, request)

    def phonemes(
        self,
        words: Iterable[str],
        locale: str = DEFAULT_LOCALE,
        voice: Optional[str] = None,
        callback: Optional[Callback] = None,
    ) -> "Future[Result[dict[str, PhonemeRecord]]]":
        """Transcribe ``words``; resolves to a record per distinct word."""
        words = list(words)
        return self._submit(
            self._run_phonemes, callback, words, locale, voice,
            fallback=default_phoneme_map(words),
        )

    def voices(
        self, callback: Optional[Callback] = None
    ) -> "Future[Result[dict[str, Voice]]]":
        """List the voices installed on the server, keyed by name."""
        return self._submit(self._run_voices, callback, fallback={})

    def locales(
        self, callback: Optional[Callback] = None
    ) -> "Future[Result[list[str]]]":
        """List the locales the server supports."""
        return self._submit(self._run_locales, callback, fallback=[])

    def input_types(self, callback: Optional[Callable[[list[str]], Any]] = None) -> list[str]:
        return _emit(InputType.keys(), callback)

    def output_types(self, callback: Optional[Callable[[list[str]], Any]] = None) -> list[str]:
        return _emit(OutputType.keys(), callback)

    def audio_formats(self, callback: Optional[Callable[[list[str]], Any]] = None) -> list[str]:
        return _emit(AudioFormat.keys(), callback)

    def is_available(self) -> bool:
        """Check if the server answers on /version."""
        try:
            r = requests.get(self.base_url + ENDPOINT_VERSION, timeout=5)
            return r.status_code == 200
        except requests.exceptions.RequestException:
            return False

    def cleanup(self) -> None:
        """Wait for pending calls and release the worker threads."""
        self._executor.shutdown(wait=True)

    def __enter__(self) -> "MaryClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.cleanup()

    # ---- Dispatch ----

    def _submit(
        self,
        fn: Callable[..., Result],
        callback: Optional[Callback],
        *args,
        fallback: Any = None,
    ) -> Future:
        try:
            future = self._executor.submit(fn, *args)
        except RuntimeError as e:
            logger.error(f"Cannot schedule request: {e}")
            return self._settled(Result(value=fallback, error=ClientClosedError(str(e))), callback)
        if callback is not None:
            future.add_done_callback(lambda f: self._deliver(f, callback))
        return future

    def _settled(self, result: Result, callback: Optional[Callback]) -> Future:
        """A future that is already done with ``result``."""
        future: Future = Future()
        future.set_result(result)
        if callback is not None:
            # Runs immediately, in the caller's thread
            future.add_done_callback(lambda f: self._deliver(f, callback))
        return future

    @staticmethod
    def _deliver(future: Future, callback: Callback) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Unexpected client error: {exc}", exc_info=exc)
            error = exc if isinstance(exc, MaryTTSError) else MaryTTSError(str(exc))
            callback(Result(error=error))
            return
        callback(future.result())

    # ---- Transport ----

    def _send(self, send: Callable[..., requests.Response], endpoint: str, **kwargs) -> requests.Response:
        url = self.base_url + endpoint
        try:
            response = send(url, timeout=self.timeout, **kwargs)
        except requests.exceptions.RequestException as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(str(e)) from e

        if response.status_code != 200:
            logger.error(f"{url} answered {response.status_code}: {response.reason}")
            raise ProtocolError(response.status_code, response.reason)
        return response

    def _get(self, endpoint: str) -> requests.Response:
        return self._send(requests.get, endpoint)

    def _post(self, endpoint: str, data: dict[str, str]) -> requests.Response:
        return self._send(requests.post, endpoint, data=data)

    # ---- Workers (run on the executor, never raise MaryTTSError) ----

    def _run_process(self, request: ProcessRequest) -> Result:
        try:
            response = self._post(ENDPOINT_PROCESS, request.form_data())
        except MaryTTSError as e:
            return Result(error=e)

        if not request.options.wants_audio:
            return Result(value=_decode_text(response))

        if request.options.base64:
            return Result(
                value=to_data_uri(response.content, response.headers.get("Content-Type"))
            )
        return Result(value=response.content)

    def _run_phonemes(self, words: list[str], locale: str, voice: Optional[str]) -> Result:
        if not words:
            return Result(value={})

        try:
            request = _build_request(" ".join(words), {
                "input_type": InputType.TEXT,
                "output_type": OutputType.PHONEMES,
                "locale": locale,
                "voice": voice,
            })
        except InvalidOptionsError as e:
            return Result(value=default_phoneme_map(words), error=e)

        processed = self._run_process(request)
        if not processed.ok:
            return Result(value=default_phoneme_map(words), error=processed.error)

        try:
            return Result(value=parse_phonemes(processed.value, words))
        except NoDataError as e:
            logger.warning(f"No phoneme data for {len(words)} word(s): {e}")
            return Result(value=default_phoneme_map(words), error=e)

    def _run_voices(self) -> Result:
        try:
            response = self._get(ENDPOINT_VOICES)
        except MaryTTSError as e:
            return Result(value={}, error=e)
        return Result(value=parse_voices(_decode_text(response)))

    def _run_locales(self) -> Result:
        try:
            response = self._get(ENDPOINT_LOCALES)
        except MaryTTSError as e:
            return Result(value=[], error=e)
        return Result(value=parse_locales(_decode_text(response)))
