# storefront/api/routers/checkout.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import JSONResponse
from pydantic.alias_generators import to_camel

from storefront.api.dependencies import get_current_user, get_registry, get_token
from storefront.domain.errors import CheckoutBusyError
from storefront.domain.schemas import (
    CheckoutOut,
    CheckoutState,
    ContactUpdateIn,
    CurrentUser,
    SubmitIn,
    SubmitOut,
)
from storefront.services.checkout_service import CheckoutSession
from storefront.services.session_registry import SessionRegistry

router = APIRouter(prefix="/checkout", tags=["checkout"])


def checkout_out(session_id: str, session: CheckoutSession, user: CurrentUser | None) -> CheckoutOut:
    return CheckoutOut(
        session_id=session_id,
        state=session.state,
        busy=session.busy,
        authenticated=user is not None,
        contact=session.form(user),
        locked_fields=[to_camel(field) for field in session.locked_fields(user)],
    )


@router.get("/{session_id}", response_model=CheckoutOut)
def get_checkout(
    session_id: str,
    registry: SessionRegistry = Depends(get_registry),
    user: CurrentUser | None = Depends(get_current_user),
):
    return checkout_out(session_id, registry.get(session_id), user)


@router.put("/{session_id}/contact", response_model=CheckoutOut)
def edit_contact(
    session_id: str,
    payload: ContactUpdateIn,
    registry: SessionRegistry = Depends(get_registry),
    user: CurrentUser | None = Depends(get_current_user),
):
    session = registry.get(session_id)
    session.edit(payload.model_dump(exclude_unset=True), user)
    return checkout_out(session_id, session, user)


@router.post("/{session_id}/submit", response_model=SubmitOut)
def submit_order(
    session_id: str,
    payload: SubmitIn,
    registry: SessionRegistry = Depends(get_registry),
    user: CurrentUser | None = Depends(get_current_user),
    token: str | None = Depends(get_token),
):
    """
    Sklada zamowienie z koszyka sesji.
    200 sukces, 422 walidacja, 502 blad backendu, 409 submit juz trwa.
    """
    session = registry.get(session_id)
    try:
        result = session.submit(
            payment_method=payload.payment_method,
            user=user,
            token=token,
            language=payload.language,
        )
    except CheckoutBusyError as e:
        raise HTTPException(status_code=409, detail=str(e))

    if result.status == CheckoutState.FAILED:
        status_code = 502 if result.error.startswith("submission_") else 422
        return JSONResponse(
            status_code=status_code,
            content=result.model_dump(mode="json", by_alias=True, exclude_none=True),
        )

    return result
