from decimal import Decimal

from pydantic_settings import BaseSettings

from farmledger.domain.contracts import FARM_TOKEN, LP_PAIR_COINS, PS_ADDRESSES, REWARD_POOLS


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "farmledger"
    debug: bool = False

    rpc_url: str = "http://localhost:8545"
    rpc_rate_per_second: float = 10.0
    coingecko_api_key: str = ""

    # Ingestion
    input_queue_size: int = 100
    output_queue_size: int = 100
    poll_timeout: float = 1.0  # Seconds a pipeline waits for a log before re-checking its stop flag
    stall_threshold: float = 600.0  # Seconds without a decoded log before a source counts as stalled
    start_block: int = 10_770_000
    subscription_batch_size: int = 1000
    subscription_poll_interval: float = 5.0

    # Attribution
    balance_tolerance: Decimal = Decimal(1)

    # Tracked token and the protocol contracts that classify its transfers
    token_address: str = FARM_TOKEN
    token_decimals: int = 18
    ps_addresses: list[str] = sorted(PS_ADDRESSES)
    lp_pair_coins: dict[str, tuple[str, int]] = dict(LP_PAIR_COINS)  # pair -> (other coin, its decimals)
    reward_pools: list[str] = sorted(REWARD_POOLS)

    @property
    def lp_pairs(self) -> list[str]:
        return sorted(self.lp_pair_coins)

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()
