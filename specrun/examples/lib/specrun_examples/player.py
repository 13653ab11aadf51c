from typing import Optional

from .song import Song


class Player:
    def __init__(self) -> None:
        self.current_song: Optional[Song] = None
        self.is_playing = False

    def play(self, song: Song) -> None:
        self.current_song = song
        self.is_playing = True

    def pause(self) -> None:
        self.is_playing = False

    def resume(self) -> None:
        if self.is_playing:
            raise RuntimeError("song is already playing")

        self.is_playing = True

    def make_favorite(self) -> None:
        assert self.current_song is not None
        self.current_song.persist_favorite_status(True)
