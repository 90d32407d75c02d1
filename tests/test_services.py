"""
Tests for service classes and the authentication utilities.
Covers business rules: credential handling, token lifecycle, the ownership
policy and the per-resource state rules.
"""

import pytest
import uuid
from datetime import timedelta
from decimal import Decimal
from jose import JWTError, jwt

from app.config import settings
from app.models.user import User, UserRole
from app.models.listing import ListingStatus
from app.schemas.auth import RegisterRequest, LoginRequest, ChangePasswordRequest
from app.schemas.user import ProfileUpdateRequest
from app.schemas.listing import ListingCreateRequest, ListingUpdateRequest, ImageCreateRequest
from app.schemas.property import PropertyCreateRequest, PropertyUpdateRequest, LocationCreateRequest
from app.schemas.inquiry import InquiryCreateRequest
from app.schemas.search import ListingSearchRequest
from app.services.auth import AuthService
from app.services.listing import ListingService
from app.services.favorite import FavoriteService
from app.services.inquiry import InquiryService
from app.services.property import PropertyService
from app.services.search import SearchService
from app.services.user import UserService
from app.utils.auth import create_access_token, verify_token, hash_password, verify_password
from app.utils.permissions import Action, can_act
from app.utils.dependencies import RoleChecker
from app.utils.exceptions import (
    AlreadyFavoritedError,
    BadRequestError,
    CannotDeleteSelfError,
    DuplicateEmailError,
    FavoriteNotFoundError,
    ForbiddenError,
    InactiveUserError,
    InsufficientPermissionsError,
    InvalidCredentialsError,
    InvalidRoleError,
    ListingNotActiveError,
    ListingNotFoundError,
    NoFieldsToUpdateError,
    NotFoundError,
    PasswordPolicyError,
    UnauthorizedError,
)
from tests.conftest import actor_for, ListingFactory


class TestTokenUtilities:
    """Signed, stateless session tokens."""

    def test_round_trip_claims(self):
        user_id = uuid.uuid4()
        token = create_access_token(user_id, "jane@example.com", "seller")

        payload = verify_token(token)

        assert payload.user_id == user_id
        assert payload.email == "jane@example.com"
        assert payload.role == "seller"

    def test_default_expiry_is_seven_days(self):
        token = create_access_token(uuid.uuid4(), "jane@example.com", "buyer")
        claims = jwt.get_unverified_claims(token)

        assert claims["exp"] - claims["iat"] == 7 * 24 * 3600

    def test_expired_token_rejected(self):
        token = create_access_token(uuid.uuid4(), "jane@example.com", "buyer", expires_delta=timedelta(seconds=-1))

        with pytest.raises(JWTError):
            verify_token(token)

    def test_tampered_token_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "email": "x@example.com", "role": "admin", "type": "access", "exp": 9999999999},
            "some-other-secret",
            algorithm=settings.jwt_algorithm
        )

        with pytest.raises(JWTError):
            verify_token(token)

    def test_malformed_token_rejected(self):
        with pytest.raises(JWTError):
            verify_token("not-a-jwt")

    def test_token_without_role_rejected(self):
        token = jwt.encode(
            {"sub": str(uuid.uuid4()), "email": "x@example.com", "type": "access", "exp": 9999999999},
            settings.jwt_secret_key,
            algorithm=settings.jwt_algorithm
        )

        with pytest.raises(JWTError):
            verify_token(token)

    def test_password_hashing(self):
        hashed = hash_password("secret1")

        assert hashed != "secret1"
        assert verify_password("secret1", hashed)
        assert not verify_password("secret2", hashed)
        assert not verify_password("", hashed)

    def test_long_passwords_compare_on_first_72_bytes(self):
        hashed = hash_password("a" * 80)

        assert verify_password("a" * 72 + "different", hashed)

    def test_empty_password_cannot_be_hashed(self):
        with pytest.raises(ValueError):
            hash_password("")


class TestAccessPolicy:
    """The central ownership policy and the role guard."""

    def _actor(self, role: str, user_id: uuid.UUID = None):
        user = User(id=user_id or uuid.uuid4(), email=f"{role}@example.com", role=UserRole(role))
        return actor_for(user)

    @pytest.mark.parametrize("action", list(Action))
    def test_admin_acts_on_anything(self, action):
        assert can_act(self._actor("admin"), action, uuid.uuid4())
        assert can_act(self._actor("admin"), action, None)

    @pytest.mark.parametrize("role", ["seller", "agent"])
    def test_owner_may_act(self, role):
        owner_id = uuid.uuid4()
        actor = self._actor(role, owner_id)

        assert can_act(actor, Action.UPDATE, owner_id)
        assert not can_act(actor, Action.UPDATE, uuid.uuid4())
        assert not can_act(actor, Action.CREATE, None)

    def test_buyer_never_acts(self):
        buyer_id = uuid.uuid4()

        assert not can_act(self._actor("buyer", buyer_id), Action.DELETE, buyer_id)

    def test_role_checker(self):
        checker = RoleChecker([UserRole.SELLER, UserRole.ADMIN])
        seller = self._actor("seller")

        assert checker(actor=seller) is seller
        with pytest.raises(InsufficientPermissionsError):
            checker(actor=self._actor("buyer"))


class TestAuthService:
    """Test AuthService functionality."""

    @pytest.mark.asyncio
    async def test_register_returns_user_and_token(self, auth_service: AuthService):
        user, token = await auth_service.register(
            RegisterRequest(name="A", email="a@x.com", password="secret1")
        )

        assert user.role == UserRole.BUYER
        payload = verify_token(token)
        assert payload.user_id == user.id
        assert payload.role == "buyer"

    @pytest.mark.asyncio
    async def test_register_with_role(self, auth_service: AuthService):
        user, _ = await auth_service.register(
            RegisterRequest(name="S", email="s@x.com", password="secret1", role="seller")
        )

        assert user.role == UserRole.SELLER

    @pytest.mark.asyncio
    async def test_register_missing_fields(self, auth_service: AuthService):
        with pytest.raises(BadRequestError, match="Name, email, and password are required"):
            await auth_service.register(RegisterRequest(email="a@x.com", password="secret1"))

    @pytest.mark.asyncio
    async def test_register_short_password(self, auth_service: AuthService):
        with pytest.raises(PasswordPolicyError, match="at least 6 characters"):
            await auth_service.register(RegisterRequest(name="A", email="a@x.com", password="12345"))

    @pytest.mark.asyncio
    async def test_register_invalid_role(self, auth_service: AuthService):
        with pytest.raises(InvalidRoleError):
            await auth_service.register(
                RegisterRequest(name="A", email="a@x.com", password="secret1", role="landlord")
            )

    @pytest.mark.asyncio
    async def test_register_duplicate(self, auth_service: AuthService, test_buyer: User):
        with pytest.raises(DuplicateEmailError):
            await auth_service.register(
                RegisterRequest(name="Again", email="buyer@example.com", password="secret1")
            )

    @pytest.mark.asyncio
    async def test_admin_self_registration_can_be_disabled(self, auth_service: AuthService, monkeypatch):
        monkeypatch.setattr(settings, "allow_admin_self_registration", False)

        with pytest.raises(ForbiddenError):
            await auth_service.register(
                RegisterRequest(name="Root", email="root@x.com", password="secret1", role="admin")
            )

    @pytest.mark.asyncio
    async def test_login_success(self, auth_service: AuthService, test_seller: User):
        user, token = await auth_service.login(
            LoginRequest(email="seller@example.com", password="testpassword123")
        )

        assert user.id == test_seller.id
        assert verify_token(token).role == "seller"

    @pytest.mark.asyncio
    async def test_login_is_case_insensitive_on_email(self, auth_service: AuthService, test_seller: User):
        user, _ = await auth_service.login(LoginRequest(email="Seller@Example.com", password="testpassword123"))

        assert user.id == test_seller.id

    @pytest.mark.asyncio
    async def test_login_wrong_password_and_unknown_email_match(self, auth_service: AuthService, test_seller: User):
        with pytest.raises(InvalidCredentialsError) as wrong_password:
            await auth_service.login(LoginRequest(email="seller@example.com", password="wrong"))
        with pytest.raises(InvalidCredentialsError) as unknown_email:
            await auth_service.login(LoginRequest(email="ghost@example.com", password="testpassword123"))

        assert wrong_password.value.detail == unknown_email.value.detail == "Invalid email or password"
        assert wrong_password.value.status_code == unknown_email.value.status_code == 401

    @pytest.mark.asyncio
    async def test_login_inactive_user(self, auth_service: AuthService, test_inactive_user: User):
        with pytest.raises(InactiveUserError):
            await auth_service.login(LoginRequest(email="inactive@example.com", password="testpassword123"))

    @pytest.mark.asyncio
    async def test_login_inactive_user_wrong_password(self, auth_service: AuthService, test_inactive_user: User):
        """The inactive flag is not revealed without the right password."""
        with pytest.raises(InvalidCredentialsError):
            await auth_service.login(LoginRequest(email="inactive@example.com", password="wrong"))

    @pytest.mark.asyncio
    async def test_login_missing_fields(self, auth_service: AuthService):
        with pytest.raises(BadRequestError, match="Email and password are required"):
            await auth_service.login(LoginRequest(email="a@x.com"))

    @pytest.mark.asyncio
    async def test_get_current_user_deleted(self, auth_service: AuthService):
        ghost = User(id=uuid.uuid4(), email="ghost@example.com", role=UserRole.BUYER)

        with pytest.raises(NotFoundError, match="User not found"):
            await auth_service.get_current_user(actor_for(ghost))

    @pytest.mark.asyncio
    async def test_update_profile_is_partial(self, auth_service: AuthService, test_seller: User):
        user = await auth_service.update_profile(actor_for(test_seller), ProfileUpdateRequest(address="5 Nile St"))

        assert user.address == "5 Nile St"
        assert user.name == "Test Seller"
        assert user.phone == "+20 100 000 0001"

    @pytest.mark.asyncio
    async def test_change_password(self, auth_service: AuthService, test_buyer: User):
        await auth_service.change_password(
            actor_for(test_buyer),
            ChangePasswordRequest(current_password="testpassword123", new_password="new-secret")
        )

        user, _ = await auth_service.login(LoginRequest(email="buyer@example.com", password="new-secret"))
        assert user.id == test_buyer.id

    @pytest.mark.asyncio
    async def test_change_password_wrong_current(self, auth_service: AuthService, test_buyer: User):
        with pytest.raises(UnauthorizedError, match="Current password is incorrect"):
            await auth_service.change_password(
                actor_for(test_buyer),
                ChangePasswordRequest(current_password="wrong", new_password="new-secret")
            )

    @pytest.mark.asyncio
    async def test_change_password_policy(self, auth_service: AuthService, test_buyer: User):
        with pytest.raises(PasswordPolicyError):
            await auth_service.change_password(
                actor_for(test_buyer),
                ChangePasswordRequest(current_password="testpassword123", new_password="short")
            )

    @pytest.mark.asyncio
    async def test_change_password_missing_fields(self, auth_service: AuthService, test_buyer: User):
        with pytest.raises(BadRequestError):
            await auth_service.change_password(actor_for(test_buyer), ChangePasswordRequest(new_password="new-secret"))


class TestAdminUserManagement:

    @pytest.mark.asyncio
    async def test_update_role(self, auth_service: AuthService, test_buyer: User):
        user = await auth_service.update_role(test_buyer.id, "agent")

        assert user.role == UserRole.AGENT

    @pytest.mark.asyncio
    @pytest.mark.parametrize("role", ["superuser", None, ""])
    async def test_update_role_invalid(self, auth_service: AuthService, test_buyer: User, role):
        with pytest.raises(InvalidRoleError):
            await auth_service.update_role(test_buyer.id, role)

    @pytest.mark.asyncio
    async def test_update_role_missing_user(self, auth_service: AuthService):
        with pytest.raises(NotFoundError):
            await auth_service.update_role(uuid.uuid4(), "seller")

    @pytest.mark.asyncio
    async def test_update_status_toggles(self, auth_service: AuthService, test_buyer: User):
        assert (await auth_service.update_status(test_buyer.id, False)).is_active is False
        assert (await auth_service.update_status(test_buyer.id, False)).is_active is False
        assert (await auth_service.update_status(test_buyer.id, True)).is_active is True

    @pytest.mark.asyncio
    async def test_delete_self_rejected(self, auth_service: AuthService, test_admin: User):
        with pytest.raises(CannotDeleteSelfError):
            await auth_service.delete_user(actor_for(test_admin), test_admin.id)

    @pytest.mark.asyncio
    async def test_delete_returns_snapshot(self, auth_service: AuthService, test_admin: User, test_buyer: User):
        snapshot = await auth_service.delete_user(actor_for(test_admin), test_buyer.id)

        assert snapshot["id"] == test_buyer.id
        assert snapshot["email"] == "buyer@example.com"
        assert "hashed_password" not in snapshot
        assert await auth_service.user_repo.get_by_id(test_buyer.id) is None

    @pytest.mark.asyncio
    async def test_delete_missing_user(self, auth_service: AuthService, test_admin: User):
        with pytest.raises(NotFoundError):
            await auth_service.delete_user(actor_for(test_admin), uuid.uuid4())


class TestListingService:
    """Ownership and state rules for listings."""

    @pytest.mark.asyncio
    async def test_seller_lists_own_property(self, listing_service: ListingService, test_seller, test_property, test_location):
        listing = await listing_service.create_listing(
            actor_for(test_seller),
            ListingCreateRequest(property_id=test_property.id, location_id=test_location.id, price=Decimal("1000"))
        )

        assert listing.status == ListingStatus.ACTIVE
        assert listing.property_id == test_property.id

    @pytest.mark.asyncio
    async def test_seller_cannot_list_foreign_property(
        self, listing_service: ListingService, test_seller, test_other_property, test_location
    ):
        with pytest.raises(ForbiddenError, match="You can only list your own properties"):
            await listing_service.create_listing(
                actor_for(test_seller),
                ListingCreateRequest(property_id=test_other_property.id, location_id=test_location.id, price=Decimal("1000"))
            )

    @pytest.mark.asyncio
    async def test_seller_with_missing_property_is_forbidden(self, listing_service: ListingService, test_seller, test_location):
        with pytest.raises(ForbiddenError):
            await listing_service.create_listing(
                actor_for(test_seller),
                ListingCreateRequest(property_id=uuid.uuid4(), location_id=test_location.id, price=Decimal("1000"))
            )

    @pytest.mark.asyncio
    async def test_admin_lists_any_property(
        self, listing_service: ListingService, test_admin, test_other_property, test_location
    ):
        listing = await listing_service.create_listing(
            actor_for(test_admin),
            ListingCreateRequest(
                property_id=test_other_property.id, location_id=test_location.id,
                price=Decimal("1000"), status=ListingStatus.PENDING
            )
        )

        assert listing.status == ListingStatus.PENDING

    @pytest.mark.asyncio
    async def test_admin_with_missing_property(self, listing_service: ListingService, test_admin, test_location):
        with pytest.raises(NotFoundError, match="Property not found"):
            await listing_service.create_listing(
                actor_for(test_admin),
                ListingCreateRequest(property_id=uuid.uuid4(), location_id=test_location.id, price=Decimal("1000"))
            )

    @pytest.mark.asyncio
    async def test_missing_location(self, listing_service: ListingService, test_seller, test_property):
        with pytest.raises(NotFoundError, match="Location not found"):
            await listing_service.create_listing(
                actor_for(test_seller),
                ListingCreateRequest(property_id=test_property.id, location_id=uuid.uuid4(), price=Decimal("1000"))
            )

    @pytest.mark.asyncio
    async def test_missing_fields(self, listing_service: ListingService, test_seller, test_property):
        with pytest.raises(BadRequestError, match="property_id, location_id, and price are required"):
            await listing_service.create_listing(
                actor_for(test_seller), ListingCreateRequest(property_id=test_property.id)
            )

    @pytest.mark.asyncio
    async def test_update_own_listing(self, listing_service: ListingService, test_seller, test_listing):
        listing = await listing_service.update_listing(
            actor_for(test_seller), test_listing.id, ListingUpdateRequest(status=ListingStatus.SOLD)
        )

        assert listing.status == ListingStatus.SOLD
        assert listing.price == Decimal("250000.00")

    @pytest.mark.asyncio
    async def test_update_foreign_listing(self, listing_service: ListingService, test_seller, test_other_listing):
        with pytest.raises(ForbiddenError, match="You can only edit your own listings"):
            await listing_service.update_listing(
                actor_for(test_seller), test_other_listing.id, ListingUpdateRequest(price=Decimal("1"))
            )

    @pytest.mark.asyncio
    async def test_admin_updates_any_listing(self, listing_service: ListingService, test_admin, test_other_listing):
        listing = await listing_service.update_listing(
            actor_for(test_admin), test_other_listing.id, ListingUpdateRequest(price=Decimal("850000"))
        )

        assert listing.price == Decimal("850000")

    @pytest.mark.asyncio
    async def test_update_without_fields(self, listing_service: ListingService, test_seller, test_listing):
        with pytest.raises(NoFieldsToUpdateError):
            await listing_service.update_listing(actor_for(test_seller), test_listing.id, ListingUpdateRequest())

    @pytest.mark.asyncio
    async def test_update_missing_listing(self, listing_service: ListingService, test_admin):
        with pytest.raises(ListingNotFoundError):
            await listing_service.update_listing(
                actor_for(test_admin), uuid.uuid4(), ListingUpdateRequest(price=Decimal("1"))
            )

    @pytest.mark.asyncio
    async def test_delete_foreign_listing(self, listing_service: ListingService, test_seller, test_other_listing):
        with pytest.raises(ForbiddenError, match="You can only delete your own listings"):
            await listing_service.delete_listing(actor_for(test_seller), test_other_listing.id)

    @pytest.mark.asyncio
    async def test_delete_own_listing(self, listing_service: ListingService, test_seller, test_listing):
        await listing_service.delete_listing(actor_for(test_seller), test_listing.id)

        with pytest.raises(ListingNotFoundError):
            await listing_service.get_listing(test_listing.id)

    @pytest.mark.asyncio
    async def test_dashboard_scoping(
        self, listing_service: ListingService, test_seller, test_admin, test_listing, test_other_listing
    ):
        own = await listing_service.list_for_dashboard(actor_for(test_seller))
        everything = await listing_service.list_for_dashboard(actor_for(test_admin))

        assert [row.listing.id for row in own] == [test_listing.id]
        assert {row.listing.id for row in everything} == {test_listing.id, test_other_listing.id}

    @pytest.mark.asyncio
    async def test_add_image_requires_ownership(
        self, listing_service: ListingService, test_seller, test_listing, test_other_listing
    ):
        image = await listing_service.add_image(
            actor_for(test_seller), test_listing.id, ImageCreateRequest(image_url="https://img.example.com/a.jpg")
        )
        assert image.listing_id == test_listing.id

        with pytest.raises(ForbiddenError):
            await listing_service.add_image(
                actor_for(test_seller), test_other_listing.id, ImageCreateRequest(image_url="https://img.example.com/b.jpg")
            )

    @pytest.mark.asyncio
    async def test_images_of_missing_listing(self, listing_service: ListingService):
        with pytest.raises(ListingNotFoundError):
            await listing_service.get_images(uuid.uuid4())


class TestPropertyService:

    @pytest.mark.asyncio
    async def test_create_property_owned_by_caller(self, property_service: PropertyService, test_agent):
        prop = await property_service.create_property(
            actor_for(test_agent), PropertyCreateRequest(type="Duplex", description="Top floor")
        )

        assert prop.owner_id == test_agent.id
        assert prop.type == "duplex"

    @pytest.mark.asyncio
    async def test_create_property_for_deleted_account(
        self, property_service: PropertyService, user_repository, test_seller
    ):
        actor = actor_for(test_seller)
        await user_repository.delete_user(test_seller.id)

        with pytest.raises(NotFoundError, match="User not found"):
            await property_service.create_property(actor, PropertyCreateRequest(type="villa"))

    @pytest.mark.asyncio
    async def test_update_foreign_property(self, property_service: PropertyService, test_other_seller, test_property):
        with pytest.raises(ForbiddenError, match="You can only edit your own properties"):
            await property_service.update_property(
                actor_for(test_other_seller), test_property.id, PropertyUpdateRequest(description="Mine now")
            )

    @pytest.mark.asyncio
    async def test_update_own_property(self, property_service: PropertyService, test_seller, test_property):
        prop = await property_service.update_property(
            actor_for(test_seller), test_property.id, PropertyUpdateRequest(description="Renovated")
        )

        assert prop.description == "Renovated"
        assert prop.type == "apartment"

    @pytest.mark.asyncio
    async def test_update_property_without_fields(self, property_service: PropertyService, test_seller, test_property):
        with pytest.raises(NoFieldsToUpdateError):
            await property_service.update_property(actor_for(test_seller), test_property.id, PropertyUpdateRequest())

    @pytest.mark.asyncio
    async def test_missing_property(self, property_service: PropertyService):
        with pytest.raises(NotFoundError):
            await property_service.get_property(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_create_location(self, property_service: PropertyService):
        location = await property_service.create_location(LocationCreateRequest(city=" Luxor ", area="West Bank"))

        assert location.city == "Luxor"
        assert [loc.id for loc in await property_service.list_locations()] == [location.id]


class TestFavoriteService:

    @pytest.mark.asyncio
    async def test_add_and_list(self, favorite_service: FavoriteService, test_buyer, test_listing):
        await favorite_service.add_favorite(actor_for(test_buyer), test_listing.id)

        favorites = await favorite_service.list_for_user(test_buyer.id)
        assert len(favorites) == 1
        assert favorites[0]["id"] == test_listing.id
        assert favorites[0]["price"] == 250000.0
        assert favorites[0]["city"] == "Cairo"
        assert await favorite_service.is_favorited(test_buyer.id, test_listing.id)

    @pytest.mark.asyncio
    async def test_add_twice(self, favorite_service: FavoriteService, test_buyer, test_listing):
        await favorite_service.add_favorite(actor_for(test_buyer), test_listing.id)

        with pytest.raises(AlreadyFavoritedError):
            await favorite_service.add_favorite(actor_for(test_buyer), test_listing.id)

    @pytest.mark.asyncio
    async def test_add_missing_listing(self, favorite_service: FavoriteService, test_buyer):
        with pytest.raises(ListingNotFoundError):
            await favorite_service.add_favorite(actor_for(test_buyer), uuid.uuid4())

    @pytest.mark.asyncio
    async def test_remove_missing(self, favorite_service: FavoriteService, test_buyer, test_listing):
        with pytest.raises(FavoriteNotFoundError):
            await favorite_service.remove_favorite(actor_for(test_buyer), test_listing.id)

    @pytest.mark.asyncio
    async def test_add_by_deleted_account(
        self, favorite_service: FavoriteService, user_repository, test_buyer, test_listing
    ):
        """A token that outlived its account cannot create favorites."""
        actor = actor_for(test_buyer)
        await user_repository.delete_user(test_buyer.id)

        with pytest.raises(NotFoundError, match="User not found"):
            await favorite_service.add_favorite(actor, test_listing.id)

        assert not await favorite_service.is_favorited(test_buyer.id, test_listing.id)


class TestInquiryService:

    @pytest.mark.asyncio
    async def test_create_inquiry(self, inquiry_service: InquiryService, test_buyer, test_listing):
        inquiry = await inquiry_service.create_inquiry(
            actor_for(test_buyer), InquiryCreateRequest(listing_id=test_listing.id, message="  Is it available?  ")
        )

        assert inquiry.message == "Is it available?"
        assert inquiry.user_id == test_buyer.id

    @pytest.mark.asyncio
    async def test_seller_may_inquire(self, inquiry_service: InquiryService, test_seller, test_other_listing):
        inquiry = await inquiry_service.create_inquiry(
            actor_for(test_seller), InquiryCreateRequest(listing_id=test_other_listing.id, message="Hello")
        )

        assert inquiry.user_id == test_seller.id

    @pytest.mark.asyncio
    async def test_inactive_listing(self, inquiry_service: InquiryService, test_buyer, test_sold_listing):
        with pytest.raises(ListingNotActiveError):
            await inquiry_service.create_inquiry(
                actor_for(test_buyer), InquiryCreateRequest(listing_id=test_sold_listing.id, message="Hello")
            )

    @pytest.mark.asyncio
    async def test_missing_listing(self, inquiry_service: InquiryService, test_buyer):
        with pytest.raises(ListingNotFoundError):
            await inquiry_service.create_inquiry(
                actor_for(test_buyer), InquiryCreateRequest(listing_id=uuid.uuid4(), message="Hello")
            )

    @pytest.mark.asyncio
    async def test_inquiry_by_deleted_account(
        self, inquiry_service: InquiryService, user_repository, test_buyer, test_listing
    ):
        actor = actor_for(test_buyer)
        await user_repository.delete_user(test_buyer.id)

        with pytest.raises(NotFoundError, match="User not found"):
            await inquiry_service.create_inquiry(
                actor, InquiryCreateRequest(listing_id=test_listing.id, message="Hello")
            )

    @pytest.mark.asyncio
    @pytest.mark.parametrize("message", [None, "", "   "])
    async def test_missing_fields(self, inquiry_service: InquiryService, test_buyer, test_listing, message):
        with pytest.raises(BadRequestError, match="Missing required fields"):
            await inquiry_service.create_inquiry(
                actor_for(test_buyer), InquiryCreateRequest(listing_id=test_listing.id, message=message)
            )

    @pytest.mark.asyncio
    async def test_listings_views(self, inquiry_service: InquiryService, db_session, test_buyer, test_listing):
        await inquiry_service.create_inquiry(
            actor_for(test_buyer), InquiryCreateRequest(listing_id=test_listing.id, message="First")
        )
        await inquiry_service.create_inquiry(
            actor_for(test_buyer), InquiryCreateRequest(listing_id=test_listing.id, message="Second")
        )
        db_session.expunge_all()

        for_listing = await inquiry_service.list_for_listing(test_listing.id)
        for_user = await inquiry_service.list_for_user(test_buyer.id)

        assert [item["message"] for item in for_listing] == ["Second", "First"]
        assert for_listing[0]["user_email"] == "buyer@example.com"
        assert for_user[0]["city"] == "Cairo"
        assert for_user[0]["property_type"] == "apartment"
        assert for_user[0]["price"] == 250000.0


class TestSearchService:

    @pytest.mark.asyncio
    async def test_request_maps_to_filters(
        self, search_service: SearchService, test_listing, test_sold_listing
    ):
        active = await search_service.search_listings(ListingSearchRequest())
        sold = await search_service.search_listings(ListingSearchRequest(status=ListingStatus.SOLD))
        cheap = await search_service.search_listings(ListingSearchRequest(maxPrice=Decimal("100")))

        assert [row.listing.id for row in active] == [test_listing.id]
        assert [row.listing.id for row in sold] == [test_sold_listing.id]
        assert cheap == []


class TestUserService:

    @pytest.mark.asyncio
    async def test_unknown_role_matches_nobody(self, user_service: UserService, test_buyer):
        assert await user_service.list_by_role("wizard") == []
        assert [user.id for user in await user_service.list_by_role("buyer")] == [test_buyer.id]

    @pytest.mark.asyncio
    async def test_missing_user(self, user_service: UserService):
        with pytest.raises(NotFoundError):
            await user_service.get_user(uuid.uuid4())

    @pytest.mark.asyncio
    async def test_activity_report(
        self, user_service: UserService, favorite_repository, inquiry_repository, listing_repository,
        db_session, test_seller, test_buyer, test_listing, test_property, test_location
    ):
        await ListingFactory.create_listing(listing_repository, test_property.id, test_location.id)
        await favorite_repository.add(test_seller.id, test_listing.id)
        await inquiry_repository.create_inquiry(test_seller.id, test_listing.id, "Reminder to self")
        db_session.expunge_all()

        activity = await user_service.get_activity(test_seller.id)

        assert activity["user"]["email"] == "seller@example.com"
        assert activity["favorites"][0]["type"] == "apartment"
        assert activity["inquiries"][0]["message"] == "Reminder to self"
        assert activity["properties"][0]["listing_count"] == 2
        assert activity["stats"] == {"favorite_count": 1, "inquiry_count": 1, "property_count": 1}
