class Song:
    def persist_favorite_status(self, value: bool) -> None:
        # something complicated
        raise NotImplementedError("not yet implemented")
