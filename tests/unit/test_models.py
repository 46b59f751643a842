from decimal import Decimal

import pytest
from pydantic import ValidationError

from farmledger.domain.enums import TransferType
from farmledger.domain.models.log import RawLog
from farmledger.domain.models.transfer import Transfer, transfer_id
from farmledger.ingestion.result import ProcessResult
from farmledger.domain.enums import ProcessStatus
from farmledger.exceptions import PriceUnavailable


class TestRawLog:
    def test_from_rpc(self):
        log = RawLog.from_rpc({
            "address": "0xA0246C9032BC3A600820415AE600C6388619A14D",
            "topics": ["0xDDF252AD1BE2C89B69C2B068FC378DAA952BA7F163C4A11628F55A4DF523B3EF"],
            "data": "0x01",
            "blockHash": "0xbb",
            "blockNumber": "0x10",
            "transactionHash": "0xcc",
            "logIndex": "0x2",
        })
        assert log.address == "0xa0246c9032bc3a600820415ae600c6388619a14d"
        assert log.topic0 == "0xddf252ad1be2c89b69c2b068fc378daa952ba7f163c4a11628f55a4df523b3ef"
        assert log.block_number == 16
        assert log.log_index == 2

    def test_missing_data_kept_as_none(self):
        log = RawLog.from_rpc({"address": "0x1", "topics": [], "blockNumber": "0x1", "logIndex": "0x0"})
        assert log.data is None
        assert log.topic0 is None

    def test_frozen(self):
        log = RawLog(address="0x1", block_hash="0x2", block_number=1, transaction_hash="0x3")
        with pytest.raises(ValidationError):
            log.data = "0x"


class TestTransfer:
    def test_transfer_id(self):
        assert transfer_id("0xABC", 7) == "0xabc_7"

    def test_sort_key(self):
        t = Transfer(
            id="0xa_1", token="0xfarm", block=10, block_date=100, log_index=1,
            tx_hash="0xa", owner="0xo", recipient="0xr", value=Decimal(1),
        )
        assert t.sort_key == (100, 10, 1)
        assert t.type == TransferType.COMMON
        assert "0xo -> 0xr" in t.print()


class TestProcessResult:
    def test_failed_from_exception(self):
        result = ProcessResult.failed(PriceUnavailable("0xfarm", 5))
        assert result.status == ProcessStatus.FAILED
        assert result.error == "PriceUnavailable: Price not found for 0xfarm at block 5"
        assert not result.ok

    def test_skipped(self):
        assert ProcessResult.skipped().record is None
