import pytest

from kvawait import Flavor, register_flavor, unregister_flavor
from tests.mocks import kvlib


@pytest.fixture(autouse=True)
def kvlib_flavor():
    """Register the in-memory library and start every test on an empty server."""
    kvlib.reset()
    flavor = register_flavor(
        Flavor(
            library=kvlib,
            client_type=kvlib.KVClient,
            transaction_types=(kvlib.Multi,),
        )
    )
    yield flavor
    unregister_flavor(library=kvlib)
    kvlib.reset()


@pytest.fixture
def client():
    return kvlib.create_client()
