"""Comparison source registry.

Provides a factory pattern for creating and retrieving comparison sources,
so the pipeline can build whichever protocols are enabled in settings.
"""

import logging
from typing import Callable, Dict, List, Optional

from config.settings import Settings, get_settings
from src.data.clients.base import ComparisonSource, ProtocolType

logger = logging.getLogger(__name__)


class ComparisonSourceRegistry:
    """Registry for comparison sources with lazy initialization.

    Provides factory methods for creating sources and manages their
    lifecycle.
    """

    _source_factories: Dict[ProtocolType, Callable[[Settings], ComparisonSource]] = {}
    _instances: Dict[ProtocolType, ComparisonSource] = {}

    @classmethod
    def register(
        cls,
        protocol_type: ProtocolType,
        factory: Callable[[Settings], ComparisonSource],
    ) -> None:
        """Register a source factory for a protocol type.

        Args:
            protocol_type: The protocol type to register
            factory: A callable taking Settings and returning a ComparisonSource
        """
        cls._source_factories[protocol_type] = factory
        logger.debug(f"Registered source factory for {protocol_type.value}")

    @classmethod
    def get_source(
        cls,
        protocol_type: ProtocolType,
        settings: Optional[Settings] = None,
        *,
        force_new: bool = False,
    ) -> ComparisonSource:
        """Get or create the source for a protocol.

        Args:
            protocol_type: The protocol type to get a source for
            settings: Optional settings to pass to the factory
            force_new: If True, create a new instance even if one exists

        Raises:
            ValueError: If no factory is registered for the protocol type
        """
        if not force_new and protocol_type in cls._instances:
            return cls._instances[protocol_type]

        if protocol_type not in cls._source_factories:
            raise ValueError(
                f"No source factory registered for protocol: {protocol_type.value}. "
                f"Available protocols: {[p.value for p in cls._source_factories.keys()]}"
            )

        settings = settings or get_settings()
        source = cls._source_factories[protocol_type](settings)
        cls._instances[protocol_type] = source
        logger.info(f"Created new source for {protocol_type.value}")
        return source

    @classmethod
    def get_enabled_sources(
        cls,
        settings: Optional[Settings] = None,
    ) -> Dict[ProtocolType, ComparisonSource]:
        """Get sources for every protocol named in ``settings.enabled_sources``.

        Unknown names are logged and ignored.
        """
        settings = settings or get_settings()
        sources = {}
        for name in settings.enabled_sources:
            try:
                protocol_type = ProtocolType(name.lower())
            except ValueError:
                logger.warning(f"Ignoring unknown comparison source: {name}")
                continue
            sources[protocol_type] = cls.get_source(protocol_type, settings)
        return sources

    @classmethod
    def get_available_protocols(cls) -> List[ProtocolType]:
        """Get list of protocols with registered factories."""
        return list(cls._source_factories.keys())

    @classmethod
    async def close_all(cls) -> None:
        """Close all active source instances."""
        for protocol_type, source in cls._instances.items():
            try:
                await source.close()
                logger.debug(f"Closed source for {protocol_type.value}")
            except Exception as e:
                logger.error(f"Error closing source for {protocol_type.value}: {e}")
        cls._instances.clear()

    @classmethod
    def clear(cls) -> None:
        """Clear all registered factories and instances.

        Primarily useful for testing.
        """
        cls._source_factories.clear()
        cls._instances.clear()


def register_default_sources() -> None:
    """Register the Kamino, Aave and Compound sources."""
    # Import here to avoid circular imports
    from src.data.clients.aave.client import AaveClient
    from src.data.clients.compound.client import CompoundClient
    from src.data.clients.kamino.client import KaminoClient

    ComparisonSourceRegistry.register(ProtocolType.KAMINO, lambda settings: KaminoClient(settings))
    ComparisonSourceRegistry.register(ProtocolType.AAVE, lambda settings: AaveClient(settings))
    ComparisonSourceRegistry.register(ProtocolType.COMPOUND, lambda settings: CompoundClient(settings))

    logger.info("Registered default comparison sources")
