"""Single "currently playing" slot shared by every history card."""


class PlaybackController:
    """Tracks which entry, if any, is playing.

    Starting an entry implicitly stops whichever one was playing before,
    so at most one audio element is ever active.
    """

    def __init__(self) -> None:
        self.playing_id: str | None = None

    def is_playing(self, entry_id: str) -> bool:
        return self.playing_id == entry_id

    def toggle(self, entry_id: str) -> str | None:
        """Stop *entry_id* if it is playing, otherwise stop others and start it."""
        if self.playing_id == entry_id:
            self.stop()
        else:
            self.stop()
            self.playing_id = entry_id
        return self.playing_id

    def stop(self) -> None:
        self.playing_id = None

    def forget(self, entry_id: str) -> None:
        """Drop *entry_id* (e.g. after deletion) if it is the one playing."""
        if self.playing_id == entry_id:
            self.stop()
