"""Storefront: the application state shared by every view.

One `Storefront` holds the catalogue, the session, the cart, the order book
and the checkout, wired to one family of collaborator adapters. The FastAPI
lifespan builds it, starts it and closes it; routes reach it through
`get_storefront`.
"""

from dataclasses import dataclass, field

import structlog
from fastapi import Request

from catalogue.descriptions import ClaudeDescriptionWriter, DescriptionWriterPort, TemplateDescriptionWriter
from catalogue.domain import catalogue as catalogue_domain
from catalogue.product.listing import ProductCatalogue
from identity.domain import identity as identity_domain
from identity.provider import FakeIdentityProvider, IdentityProviderPort
from identity.session.state import SessionState
from notifications.channel.fake_email import FakeEmailAdapter
from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter
from notifications.seller.notifier import SellerNotifier, SellerNotifierPort
from ordering.cart.engine import CartEngine
from ordering.checkout.checkout import Checkout
from ordering.domain import ordering as ordering_domain
from ordering.order.book import OrderBook
from shared.config import Backend, Settings
from shared.storage import (
    BlobStorePort,
    FileKeyValueStore,
    InMemoryBlobStore,
    InMemoryKeyValueStore,
    InMemoryObjectStore,
    KeyValueStorePort,
    ObjectStorePort,
)

logger = structlog.get_logger(__name__)

_domains_initialized = False


def init_domains() -> None:
    """Initialize the three domains once per process."""
    global _domains_initialized
    if _domains_initialized:
        return
    identity_domain.init()
    catalogue_domain.init()
    ordering_domain.init()
    _domains_initialized = True


@dataclass
class Collaborators:
    """The external services a storefront talks to."""

    object_store: ObjectStorePort = field(default_factory=InMemoryObjectStore)
    blob_store: BlobStorePort = field(default_factory=InMemoryBlobStore)
    identity_provider: IdentityProviderPort = field(default_factory=FakeIdentityProvider)
    local_store: KeyValueStorePort = field(default_factory=InMemoryKeyValueStore)
    description_writer: DescriptionWriterPort = field(default_factory=TemplateDescriptionWriter)
    notifier: SellerNotifierPort | None = None


class Storefront:
    def __init__(self, collaborators: Collaborators, settings: Settings | None = None) -> None:
        settings = settings or Settings()
        self.collaborators = collaborators

        self.session = SessionState(collaborators.identity_provider)
        self.catalogue = ProductCatalogue(
            collaborators.object_store,
            collaborators.blob_store,
            self.session,
            collaborators.description_writer,
        )
        self.orders = OrderBook(collaborators.object_store, self.session)
        with ordering_domain.domain_context():
            self.cart = CartEngine(collaborators.local_store)

        self.notifier = collaborators.notifier or SellerNotifier(
            email=FakeEmailAdapter(),
            whatsapp=FakeWhatsAppAdapter(),
            seller_email=settings.SELLER_EMAIL,
            seller_whatsapp=settings.SELLER_WHATSAPP,
        )
        self.checkout = Checkout(self.cart, self.orders, self.session, self.notifier)
        self.checkout_busy = False

    async def start(self) -> None:
        """Attach to the identity provider and load everything the views read."""
        with identity_domain.domain_context():
            self.session.start()
        with catalogue_domain.domain_context():
            await self.catalogue.load()
        with ordering_domain.domain_context():
            await self.orders.load()
            self.cart.restore()
        logger.info("Storefront started", session=self.session.status.value)

    def close(self) -> None:
        self.orders.close()
        self.session.close()
        logger.info("Storefront closed")


def build_collaborators(settings: Settings) -> Collaborators:
    """Adapters for the configured backend."""
    if settings.backend == Backend.MEMORY:
        return Collaborators(local_store=InMemoryKeyValueStore())

    from identity.provider.supabase_identity import SupabaseIdentityProvider
    from shared.backend import SupabaseBlobStore, SupabaseObjectStore, get_supabase

    client = get_supabase(settings)
    writer: DescriptionWriterPort = (
        ClaudeDescriptionWriter(api_key=settings.ANTHROPIC_API_KEY, model=settings.CLAUDE_MODEL)
        if settings.ANTHROPIC_API_KEY
        else TemplateDescriptionWriter()
    )
    return Collaborators(
        object_store=SupabaseObjectStore(client),
        blob_store=SupabaseBlobStore(client, settings.SUPABASE_STORAGE_BUCKET),
        identity_provider=SupabaseIdentityProvider(client),
        local_store=FileKeyValueStore(settings.LOCAL_STORE_DIR),
        description_writer=writer,
    )


def build_storefront(settings: Settings | None = None) -> Storefront:
    settings = settings or Settings()
    logger.info("Building storefront", backend=settings.backend.value)
    return Storefront(build_collaborators(settings), settings)


def get_storefront(request: Request) -> Storefront:
    """FastAPI dependency returning the running storefront."""
    return request.app.state.storefront
