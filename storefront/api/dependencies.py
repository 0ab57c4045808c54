# storefront/api/dependencies.py
from functools import lru_cache

from fastapi import Depends, Header

from storefront.domain.schemas import CurrentUser
from storefront.repos.cart_repo import CartRepo
from storefront.services.order_client import OrderClient
from storefront.services.profile_client import ProfileClient
from storefront.services.session_registry import SessionRegistry
from storefront.utils.settings import CART_PERSISTENCE_ENABLED


@lru_cache
def get_order_client() -> OrderClient:
    return OrderClient()


@lru_cache
def get_profile_client() -> ProfileClient:
    return ProfileClient()


@lru_cache
def get_registry() -> SessionRegistry:
    return SessionRegistry(
        order_client=get_order_client(),
        cart_repo=CartRepo() if CART_PERSISTENCE_ENABLED else None,
    )


def get_token(authorization: str | None = Header(None)) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_current_user(
    token: str | None = Depends(get_token),
    profiles: ProfileClient = Depends(get_profile_client),
) -> CurrentUser | None:
    return profiles.fetch_profile(token)
