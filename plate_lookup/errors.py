class InvalidPlateFormat(ValueError):
    def __init__(self, plate: str) -> None:
        super().__init__(f"Invalid plate format: {plate!r}")
        self.plate = plate


class MalformedPayload(ValueError):
    def __init__(self, message: str, *, source: str | None = None) -> None:
        super().__init__(message)
        self.source = source
