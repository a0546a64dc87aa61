"""KohliVerse: ranking, voting and duplicate detection for shared video links."""

__version__ = "0.1.0"
