"""
Test configuration and fixtures for the property marketplace API.
Provides database fixtures, test data factories, and common test utilities.
"""

import os

# Settings are read once at import time, so the environment must be in place
# before anything from the app package is imported.
os.environ["ENVIRONMENT"] = "testing"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-for-the-marketplace-suite"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["ALLOW_ADMIN_SELF_REGISTRATION"] = "true"

import pytest
import uuid
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import AsyncGenerator, Dict
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, AsyncEngine, async_sessionmaker

from app.main import app
from app.database import build_engine, create_tables, get_db
from app.models.user import User, UserRole
from app.models.property import Property, Location
from app.models.listing import Listing, ListingStatus
from app.models.image import PropertyImage
from app.repositories.user import UserRepository
from app.repositories.property import PropertyRepository, LocationRepository
from app.repositories.listing import ListingRepository
from app.repositories.favorite import FavoriteRepository
from app.repositories.inquiry import InquiryRepository
from app.repositories.search import SearchRepository
from app.services.auth import AuthService
from app.services.property import PropertyService
from app.services.listing import ListingService
from app.services.favorite import FavoriteService
from app.services.inquiry import InquiryService
from app.services.search import SearchService
from app.services.user import UserService
from app.utils.auth import TokenPayload


TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "testpassword123"


@pytest.fixture
async def test_engine() -> AsyncGenerator[AsyncEngine, None]:
    """Fresh in-memory database with the full schema for every test."""
    engine = build_engine(TEST_DATABASE_URL)
    await create_tables(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(test_engine: AsyncEngine) -> async_sessionmaker:
    return async_sessionmaker(
        bind=test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )


@pytest.fixture
async def db_session(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def async_client(session_factory: async_sessionmaker) -> AsyncGenerator[AsyncClient, None]:
    """
    Create an async test client. Every request gets its own session, the way
    the production `get_db` dependency behaves.
    """
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


# Repository fixtures
@pytest.fixture
def user_repository(db_session: AsyncSession) -> UserRepository:
    return UserRepository(db_session)


@pytest.fixture
def property_repository(db_session: AsyncSession) -> PropertyRepository:
    return PropertyRepository(db_session)


@pytest.fixture
def location_repository(db_session: AsyncSession) -> LocationRepository:
    return LocationRepository(db_session)


@pytest.fixture
def listing_repository(db_session: AsyncSession) -> ListingRepository:
    return ListingRepository(db_session)


@pytest.fixture
def favorite_repository(db_session: AsyncSession) -> FavoriteRepository:
    return FavoriteRepository(db_session)


@pytest.fixture
def inquiry_repository(db_session: AsyncSession) -> InquiryRepository:
    return InquiryRepository(db_session)


@pytest.fixture
def search_repository(db_session: AsyncSession) -> SearchRepository:
    return SearchRepository(db_session)


# Service fixtures
@pytest.fixture
def auth_service(db_session: AsyncSession) -> AuthService:
    return AuthService(db_session)


@pytest.fixture
def property_service(db_session: AsyncSession) -> PropertyService:
    return PropertyService(db_session)


@pytest.fixture
def listing_service(db_session: AsyncSession) -> ListingService:
    return ListingService(db_session)


@pytest.fixture
def favorite_service(db_session: AsyncSession) -> FavoriteService:
    return FavoriteService(db_session)


@pytest.fixture
def inquiry_service(db_session: AsyncSession) -> InquiryService:
    return InquiryService(db_session)


@pytest.fixture
def search_service(db_session: AsyncSession) -> SearchService:
    return SearchService(db_session)


@pytest.fixture
def user_service(db_session: AsyncSession) -> UserService:
    return UserService(db_session)


# Test data factories
class UserFactory:
    """Factory for creating test users."""

    @staticmethod
    def create_user_data(
        email: str = None,
        password: str = DEFAULT_PASSWORD,
        name: str = "Test User",
        role: UserRole = UserRole.BUYER,
        is_active: bool = True,
        phone: str = None,
        address: str = None
    ) -> dict:
        """Create user data dictionary."""
        return {
            "email": email or f"user{uuid.uuid4().hex[:8]}@example.com",
            "password": password,
            "name": name,
            "role": role,
            "is_active": is_active,
            "phone": phone,
            "address": address,
        }

    @staticmethod
    async def create_user(user_repo: UserRepository, **kwargs) -> User:
        """Create a test user in the database."""
        return await user_repo.create_user(UserFactory.create_user_data(**kwargs))


class LocationFactory:
    """Factory for creating test locations."""

    @staticmethod
    async def create_location(
        location_repo: LocationRepository,
        city: str = "Cairo",
        area: str = "Zamalek",
        address: str = "12 Brazil St"
    ) -> Location:
        return await location_repo.create({"city": city, "area": area, "address": address})


class PropertyFactory:
    """Factory for creating test properties."""

    @staticmethod
    async def create_property(
        property_repo: PropertyRepository,
        owner_id: uuid.UUID,
        type: str = "apartment",
        description: str = "Two bedrooms with a balcony"
    ) -> Property:
        return await property_repo.create_property({
            "owner_id": owner_id,
            "type": type,
            "description": description,
        })


class ListingFactory:
    """Factory for creating test listings."""

    @staticmethod
    async def create_listing(
        listing_repo: ListingRepository,
        property_id: uuid.UUID,
        location_id: uuid.UUID,
        price: Decimal = Decimal("250000.00"),
        status: ListingStatus = ListingStatus.ACTIVE
    ) -> Listing:
        return await listing_repo.create_listing({
            "property_id": property_id,
            "location_id": location_id,
            "price": price,
            "status": status,
        })


# Common test fixtures
@pytest.fixture
async def test_buyer(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="buyer@example.com",
        name="Test Buyer",
        role=UserRole.BUYER
    )


@pytest.fixture
async def test_seller(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="seller@example.com",
        name="Test Seller",
        role=UserRole.SELLER,
        phone="+20 100 000 0001"
    )


@pytest.fixture
async def test_other_seller(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="other.seller@example.com",
        name="Other Seller",
        role=UserRole.SELLER
    )


@pytest.fixture
async def test_agent(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="agent@example.com",
        name="Test Agent",
        role=UserRole.AGENT
    )


@pytest.fixture
async def test_admin(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="admin@example.com",
        name="Test Admin",
        role=UserRole.ADMIN
    )


@pytest.fixture
async def test_inactive_user(user_repository: UserRepository) -> User:
    return await UserFactory.create_user(
        user_repository,
        email="inactive@example.com",
        name="Inactive User",
        role=UserRole.BUYER,
        is_active=False
    )


@pytest.fixture
async def test_location(location_repository: LocationRepository) -> Location:
    return await LocationFactory.create_location(location_repository)


@pytest.fixture
async def test_property(property_repository: PropertyRepository, test_seller: User) -> Property:
    return await PropertyFactory.create_property(property_repository, owner_id=test_seller.id)


@pytest.fixture
async def test_other_property(property_repository: PropertyRepository, test_other_seller: User) -> Property:
    return await PropertyFactory.create_property(
        property_repository,
        owner_id=test_other_seller.id,
        type="villa",
        description="Villa with a garden"
    )


@pytest.fixture
async def test_listing(
    listing_repository: ListingRepository,
    test_property: Property,
    test_location: Location
) -> Listing:
    return await ListingFactory.create_listing(
        listing_repository,
        property_id=test_property.id,
        location_id=test_location.id
    )


@pytest.fixture
async def test_other_listing(
    listing_repository: ListingRepository,
    test_other_property: Property,
    test_location: Location
) -> Listing:
    return await ListingFactory.create_listing(
        listing_repository,
        property_id=test_other_property.id,
        location_id=test_location.id,
        price=Decimal("900000.00")
    )


@pytest.fixture
async def test_sold_listing(
    listing_repository: ListingRepository,
    test_property: Property,
    test_location: Location
) -> Listing:
    return await ListingFactory.create_listing(
        listing_repository,
        property_id=test_property.id,
        location_id=test_location.id,
        price=Decimal("120000.00"),
        status=ListingStatus.SOLD
    )


@pytest.fixture
async def test_listing_image(listing_repository: ListingRepository, test_listing: Listing) -> PropertyImage:
    return await listing_repository.add_image(test_listing.id, "https://images.example.com/primary.jpg")


# Utility functions for tests
def actor_for(user: User) -> TokenPayload:
    """Identity the guard would produce for this user's token."""
    return TokenPayload(
        user_id=user.id,
        email=user.email,
        role=user.role.value,
        exp=datetime.now(timezone.utc) + timedelta(days=7)
    )


def auth_headers(user: User) -> Dict[str, str]:
    return {"Authorization": f"Bearer {AuthService.issue_token(user)}"}


def assert_no_password(user_data: dict):
    """A serialized user must never carry credential material."""
    assert "password" not in user_data
    assert "hashed_password" not in user_data
