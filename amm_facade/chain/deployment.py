"""Wire up a complete in-memory system: registry, wrapper, router and facade."""

from __future__ import annotations

from dataclasses import dataclass

import structlog

from amm_facade.chain.factory import Factory
from amm_facade.chain.router import Router
from amm_facade.chain.state import Chain
from amm_facade.chain.token import FungibleToken
from amm_facade.chain.wrapped_native import WrappedNative
from amm_facade.config import FacadeConfig
from amm_facade.facade import Facade

logger = structlog.get_logger()


@dataclass
class Deployment:
    """Handles to every deployed component."""

    chain: Chain
    config: FacadeConfig
    factory: Factory
    wrapped_native: WrappedNative
    router: Router
    facade: Facade

    def deploy_token(self, symbol: str, decimals: int = 18, address: str | None = None) -> FungibleToken:
        """Deploy a fungible token, at a chosen address if given."""
        token = FungibleToken(
            self.chain, address or self.chain.new_address(), symbol=symbol, decimals=decimals
        )
        self.chain.deploy(token)
        return token


def deploy_system(
    chain: Chain,
    *,
    fee_numerator: int | None = None,
    fee_denominator: int | None = None,
    wrapped_native_address: str | None = None,
) -> Deployment:
    """Deploy factory, wrapped native token, router and facade on chain.

    Fee parameters not given explicitly are read from the environment
    (see FacadeConfig.from_env). The pools' invariant check uses the same
    fee rate as the facade's pricing.
    """
    factory_address = chain.new_address()
    wrapped_native_address = wrapped_native_address or chain.new_address()
    router_address = chain.new_address()
    facade_address = chain.new_address()

    config = FacadeConfig.from_env(
        factory=factory_address, router=router_address, wrapped_native=wrapped_native_address
    )
    if fee_numerator is not None or fee_denominator is not None:
        config = FacadeConfig(
            factory=config.factory,
            router=config.router,
            wrapped_native=config.wrapped_native,
            fee_numerator=fee_numerator if fee_numerator is not None else config.fee_numerator,
            fee_denominator=(
                fee_denominator if fee_denominator is not None else config.fee_denominator
            ),
        )

    factory = chain.deploy(Factory(chain, config.factory, fee=config.fee))
    wrapped_native = chain.deploy(WrappedNative(chain, config.wrapped_native))
    router = chain.deploy(Router(chain, config.router, config.factory, config.wrapped_native))
    facade = chain.deploy(Facade(chain, facade_address, config))

    logger.info(
        "system_deployed",
        factory=factory.address,
        wrapped_native=wrapped_native.address,
        router=router.address,
        facade=facade.address,
        fee=f"{config.fee_numerator}/{config.fee_denominator}",
    )
    return Deployment(
        chain=chain,
        config=config,
        factory=factory,
        wrapped_native=wrapped_native,
        router=router,
        facade=facade,
    )


__all__ = ["Deployment", "deploy_system"]
