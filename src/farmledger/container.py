from dependency_injector import containers, providers

from farmledger.abi.decoder import AbiDecoder
from farmledger.abi.registry import build_default_registry
from farmledger.config import Settings
from farmledger.db.session import build_engine, build_session_factory
from farmledger.events.decoder import EventDecoder
from farmledger.infra.blockchain.evm.block_service import EthBlockService
from farmledger.infra.blockchain.evm.rpc_client import EthRpcClient
from farmledger.infra.blockchain.evm.subscription import LogSubscription
from farmledger.infra.http.rate_limited_client import RateLimitedClient
from farmledger.infra.price.coingecko import CoinGeckoProvider
from farmledger.infra.price.service import PriceService
from farmledger.ingestion.converter import TransferConverter
from farmledger.ingestion.lp_converter import LpTradeConverter
from farmledger.ingestion.monitor import SourceMonitor
from farmledger.ingestion.pipeline import LpTradePipeline, TransferPipeline


def _watched_addresses(token_address: str, lp_pairs: list[str]) -> list[str]:
    return [token_address, *lp_pairs]


class Container(containers.DeclarativeContainer):
    settings = providers.Singleton(Settings)

    engine = providers.Singleton(
        build_engine,
        database_url=settings.provided.database_url,
        echo=settings.provided.debug,
    )

    session_factory = providers.Singleton(
        build_session_factory,
        engine=engine,
    )

    registry = providers.Singleton(build_default_registry)

    abi_decoder = providers.Singleton(AbiDecoder, registry=registry)

    event_decoder = providers.Singleton(EventDecoder, abi_decoder=abi_decoder)

    http_client = providers.Singleton(
        RateLimitedClient,
        rate_per_second=settings.provided.rpc_rate_per_second,
    )

    chain = providers.Singleton(
        EthRpcClient,
        rpc_url=settings.provided.rpc_url,
        http_client=http_client,
        abi_decoder=abi_decoder,
    )

    block_service = providers.Singleton(EthBlockService, chain=chain)

    coingecko = providers.Singleton(
        CoinGeckoProvider,
        http_client=http_client,
        api_key=settings.provided.coingecko_api_key,
    )

    price_service = providers.Singleton(
        PriceService,
        session_factory=session_factory,
        chain=chain,
        coingecko=coingecko,
    )

    transfer_converter = providers.Singleton(
        TransferConverter,
        token=settings.provided.token_address,
        decimals=settings.provided.token_decimals,
        ps_pools=settings.provided.ps_addresses,
        reward_pools=settings.provided.reward_pools,
        lp_pairs=settings.provided.lp_pairs,
    )

    transfer_pipeline = providers.Singleton(
        TransferPipeline,
        name="transfers",
        event_decoder=event_decoder,
        converter=transfer_converter,
        chain=chain,
        block_service=block_service,
        price_oracle=price_service,
        session_factory=session_factory,
        abi_decoder=abi_decoder,
        not_checkable=settings.provided.ps_addresses,
        balance_tolerance=settings.provided.balance_tolerance,
        input_queue_size=settings.provided.input_queue_size,
        output_queue_size=settings.provided.output_queue_size,
        poll_timeout=settings.provided.poll_timeout,
    )

    lp_converter = providers.Singleton(
        LpTradeConverter,
        token=settings.provided.token_address,
        pair_coins=settings.provided.lp_pair_coins,
        decimals=settings.provided.token_decimals,
    )

    lp_pipeline = providers.Singleton(
        LpTradePipeline,
        name="lp_trades",
        event_decoder=event_decoder,
        converter=lp_converter,
        chain=chain,
        block_service=block_service,
        price_oracle=price_service,
        session_factory=session_factory,
        abi_decoder=abi_decoder,
        input_queue_size=settings.provided.input_queue_size,
        output_queue_size=settings.provided.output_queue_size,
        poll_timeout=settings.provided.poll_timeout,
    )

    subscription = providers.Singleton(
        LogSubscription,
        chain=chain,
        addresses=providers.Callable(
            _watched_addresses, settings.provided.token_address, settings.provided.lp_pairs,
        ),
        start_block=settings.provided.start_block,
        batch_size=settings.provided.subscription_batch_size,
        poll_interval=settings.provided.subscription_poll_interval,
    )

    monitor = providers.Singleton(
        SourceMonitor,
        stall_threshold=settings.provided.stall_threshold,
    )
