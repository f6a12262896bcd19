# Base error of everything going wrong while talking to the inference provider.
class ProviderError(Exception):
    pass


# Raise when prediction finished but not succeeded.
class PredictionError(ProviderError):

    def __init__(self, pid: str, status: str, detail: str | None) -> None:
        self.pid = pid
        self.status = status
        self.detail = detail

    def __str__(self) -> str:
        return f"prediction {self.pid} {self.status}: {self.detail}"
