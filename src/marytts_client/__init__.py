"""Client library for MaryTTS text-to-speech servers."""

__version__ = "0.3.0"
