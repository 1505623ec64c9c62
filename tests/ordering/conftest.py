import pytest


@pytest.fixture(scope="session")
def _ordering_domain():
    from ordering.domain import ordering

    return ordering


@pytest.fixture(autouse=True)
def _ctx(_ordering_domain):
    with _ordering_domain.domain_context():
        yield


@pytest.fixture
def make_product(product_record):
    """Factory for catalogue products to put in the cart."""
    from catalogue.product.product import Product

    def _make(**overrides):
        return Product.from_record(product_record(**overrides))

    return _make


@pytest.fixture
def local_store():
    from shared.storage import InMemoryKeyValueStore

    return InMemoryKeyValueStore()


@pytest.fixture
def cart_engine(local_store):
    from ordering.cart.engine import CartEngine

    return CartEngine(local_store)


@pytest.fixture
def object_store():
    from shared.storage import InMemoryObjectStore

    return InMemoryObjectStore()


@pytest.fixture
def identity_provider():
    from identity.provider import FakeIdentityProvider

    return FakeIdentityProvider()


@pytest.fixture
def session(identity_provider):
    from identity.session.state import SessionState

    state = SessionState(identity_provider)
    state.start()
    yield state
    state.close()


@pytest.fixture
def sign_in(identity_provider, session):
    """Sign a shopper in (registering them first) and return the principal."""
    import asyncio

    def _sign_in(email="asha@example.com", password="secret12"):
        if email.lower() not in identity_provider.accounts:
            identity_provider.register(email, password)
        return asyncio.run(session.login(email, password))

    return _sign_in


@pytest.fixture
def order_book(object_store, session):
    from ordering.order.book import OrderBook

    book = OrderBook(object_store, session)
    yield book
    book.close()


@pytest.fixture
def email_channel():
    from notifications.channel.fake_email import FakeEmailAdapter

    return FakeEmailAdapter()


@pytest.fixture
def whatsapp_channel():
    from notifications.channel.fake_whatsapp import FakeWhatsAppAdapter

    return FakeWhatsAppAdapter()


@pytest.fixture
def notifier(email_channel, whatsapp_channel):
    from notifications.seller.notifier import SellerNotifier

    return SellerNotifier(email_channel, whatsapp_channel, "seller@shop.test", "+15550001111")


@pytest.fixture
def checkout(cart_engine, order_book, session, notifier):
    from ordering.checkout.checkout import Checkout

    return Checkout(cart_engine, order_book, session, notifier)


@pytest.fixture
def checkout_form():
    from ordering.checkout.checkout import CheckoutForm

    def _make(**overrides):
        values = {
            "customer_name": "Asha Verma",
            "customer_email": "asha@example.com",
            "customer_phone": "+91 98765 43210",
            "delivery_address": "12 Park Street, Kolkata 700016",
        }
        values.update(overrides)
        return CheckoutForm(**values)

    return _make
