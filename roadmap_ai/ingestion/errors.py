## Failures raised by the ingestion stages


class PayloadError(ValueError):
    """Base class for anything that went wrong turning model text into a document."""


class TruncatedPayloadError(PayloadError):
    def __init__(self, length: int):
        super().__init__(f"Invalid response format: JSON payload truncated and could not be salvaged (length={length})")
        self.length = length


class MalformedPayloadError(PayloadError):
    pass


class SchemaValidationError(PayloadError):
    def __init__(self, document: str, issues: list[tuple[str, str]]):
        self.document = document
        self.issues = issues
        details = ", ".join(f"{path}: {message}" for path, message in issues)
        super().__init__(f"Invalid {document}: {details}")

    @property
    def fields(self) -> list[str]:
        return [path for path, _ in self.issues]
