class Reporter:
    def __init__(self) -> None:
        raise RuntimeError("cannot construct reporter")
