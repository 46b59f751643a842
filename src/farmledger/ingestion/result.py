"""ProcessResult: outcome of processing one raw log."""

from pydantic import BaseModel

from farmledger.domain.enums import ProcessStatus
from farmledger.domain.models.lp_trade import LpTrade
from farmledger.domain.models.transfer import Transfer

Record = Transfer | LpTrade


class ProcessResult(BaseModel):
    status: ProcessStatus
    record: Record | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status == ProcessStatus.SAVED

    @classmethod
    def saved(cls, record: Record) -> "ProcessResult":
        return cls(status=ProcessStatus.SAVED, record=record)

    @classmethod
    def duplicate(cls, record: Record) -> "ProcessResult":
        return cls(status=ProcessStatus.DUPLICATE, record=record)

    @classmethod
    def skipped(cls) -> "ProcessResult":
        return cls(status=ProcessStatus.SKIPPED)

    @classmethod
    def failed(cls, error: Exception | str) -> "ProcessResult":
        message = error if isinstance(error, str) else f"{type(error).__name__}: {error}"
        return cls(status=ProcessStatus.FAILED, error=message)
