import sys, os, pytest, pytest_asyncio, httpx
from httpx import ASGITransport

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from main import app
from payloads.reference import get_reference_tables


@pytest_asyncio.fixture
async def client():
    """Erstellt einen funktionierenden Testclient."""
    transport = ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def fresh_reference_tables():
    """Leert den Referenzdaten-Cache vor und nach dem Test."""
    get_reference_tables.cache_clear()
    yield
    get_reference_tables.cache_clear()
