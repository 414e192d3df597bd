# JiveSDK - builds and wires the SDK components once per process.
# Created: 2026-02-12

from __future__ import annotations

import logging

from jive_sdk.community.registration import RegistrationProcessor, RegistrationValidator
from jive_sdk.community.service import CommunityService
from jive_sdk.config import Settings, get_settings
from jive_sdk.events.catalog import TileServices, UnconfiguredTileServices, register_base_events
from jive_sdk.events.registry import EventRegistry
from jive_sdk.http import HttpTransport
from jive_sdk.oauth.client import JiveOAuthClient
from jive_sdk.oauth.handler import OAuthHandler
from jive_sdk.oauth.refresher import TokenRefresher
from jive_sdk.persistence.memory import MemoryPersistence
from jive_sdk.persistence.protocol import PersistenceProtocol

logger = logging.getLogger(__name__)


class JiveSDK:
    """Composition root.

    Owns one OAuthHandler (with its TokenRefresher), one CommunityService and
    one EventRegistry, and hands them to each other by reference. The baseline
    event catalog is registered on construction.

    Usage:
        sdk = JiveSDK(persistence=FilePersistence(), services=my_tile_services)
        community = await sdk.registration.register(block)
        resp = await sdk.communities.do_request(community, path="/api/core/v3/people/@me")
    """

    def __init__(
        self,
        settings: Settings | None = None,
        persistence: PersistenceProtocol | None = None,
        transport: HttpTransport | None = None,
        services: TileServices | None = None,
        events: EventRegistry | None = None,
    ):
        self.settings = settings or get_settings()
        self.persistence = persistence or MemoryPersistence()
        self.transport = transport or HttpTransport(self.settings)
        self.events = events or EventRegistry()

        self.oauth_client = JiveOAuthClient(self.transport)
        self.refresher = TokenRefresher(self.oauth_client)
        self.oauth_handler = OAuthHandler(self.refresher)
        self.communities = CommunityService(
            self.persistence, self.transport, self.oauth_client, self.oauth_handler
        )
        self.validator = RegistrationValidator(self.transport, self.settings)
        self.registration = RegistrationProcessor(
            self.validator, self.communities, self.oauth_client, self.events, self.settings
        )

        register_base_events(
            self.events, services or UnconfiguredTileServices(), self.registration.register
        )
        logger.debug("Jive SDK ready (development=%s)", self.settings.development)
