import traceback


class SpecRunError(Exception):
    pass


class InvalidWorkerCountError(SpecRunError):
    def __init__(self) -> None:
        super().__init__("Argument to --parallel= must be an integer greater than 1")


class InvalidConfigurationError(SpecRunError):
    pass


class ConfigFileNotFoundError(SpecRunError):
    pass


class InvalidReporterError(SpecRunError):
    def __init__(self, identifier: str, error: str) -> None:
        super().__init__(f"invalid reporter: {identifier}, {error}")


def _format_underlying_error(error: BaseException) -> str:
    formatted = "".join(
        traceback.format_exception(type(error), error, error.__traceback__)
    )
    return f"\nUnderlying error: {formatted.rstrip()}\n(end underlying error)"


class ReporterLoadError(SpecRunError):
    def __init__(self, identifier: str, error: BaseException) -> None:
        self.identifier = identifier
        super().__init__(
            f"Failed to load reporter module {identifier}"
            + _format_underlying_error(error)
        )


class ReporterInstantiationError(SpecRunError):
    def __init__(self, identifier: str, error: BaseException) -> None:
        self.identifier = identifier
        super().__init__(
            f"Failed to instantiate reporter from {identifier}"
            + _format_underlying_error(error)
        )
