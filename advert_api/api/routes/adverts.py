from fastapi import APIRouter, Depends, HTTPException, status

from advert_api.api.dependencies import get_advert_store, get_confirm_advert_use_case
from advert_api.api.schemas.advert_schemas import (
    AdvertResponse,
    ConfirmAdvertRequest,
    ConfirmAdvertResponse,
    CreateAdvertRequest,
    CreateAdvertResponse,
)
from advert_api.application.services.advert_store import AdvertStore
from advert_api.application.use_cases.confirm_advert import ConfirmAdvert, ConfirmAdvertInput
from advert_api.domain.entities.advert import (
    Activate,
    Advert,
    AdvertSubmission,
    ConfirmationOutcome,
    Reject,
)
from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.domain.results import AdvertError, ErrorKind

router = APIRouter(prefix="/adverts/v1", tags=["adverts"])

_STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.TRANSIENT: status.HTTP_503_SERVICE_UNAVAILABLE,
}


_RETRY_AFTER_SECONDS = "1"


def _raise_for_error(error: AdvertError) -> None:
    headers = {"Retry-After": _RETRY_AFTER_SECONDS} if error.kind.retryable else None
    raise HTTPException(
        status_code=_STATUS_BY_KIND[error.kind],
        detail=error.message,
        headers=headers,
    )


def _advert_to_response(advert: Advert) -> AdvertResponse:
    return AdvertResponse(
        id=advert.id,
        title=advert.title,
        description=advert.description,
        price=advert.price,
        user_name=advert.user_name,
        status=advert.status,
        creation_date_time=advert.creation_date_time,
        file_path=advert.file_path,
    )


def _to_outcome(body: ConfirmAdvertRequest) -> ConfirmationOutcome | None:
    if body.status == AdvertStatus.ACTIVE:
        return Activate(file_path=body.file_path or "")
    if body.status == AdvertStatus.DELETED:
        return Reject()
    return None


@router.post(
    "/create",
    status_code=status.HTTP_201_CREATED,
    response_model=CreateAdvertResponse,
)
async def create_advert(
    body: CreateAdvertRequest,
    store: AdvertStore = Depends(get_advert_store),
) -> CreateAdvertResponse:
    result = await store.create(
        AdvertSubmission(
            title=body.title,
            description=body.description,
            price=body.price,
            user_name=body.user_name,
        )
    )
    if result.error is not None:
        _raise_for_error(result.error)
    return CreateAdvertResponse(id=result.unwrap())


@router.put("/confirm", response_model=ConfirmAdvertResponse)
async def confirm_advert(
    body: ConfirmAdvertRequest,
    use_case: ConfirmAdvert = Depends(get_confirm_advert_use_case),
) -> ConfirmAdvertResponse:
    outcome = _to_outcome(body)
    if outcome is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Cannot confirm an advert as {body.status.value}.",
        )

    result = await use_case.execute(ConfirmAdvertInput(advert_id=body.id, outcome=outcome))
    if result.error is not None:
        _raise_for_error(result.error)

    output = result.unwrap()
    return ConfirmAdvertResponse(id=output.advert_id, status=output.status, notified=output.notified)


@router.get("/all", response_model=list[AdvertResponse])
async def list_adverts(
    store: AdvertStore = Depends(get_advert_store),
) -> list[AdvertResponse]:
    """Return every stored advert (full scan, no pagination)."""
    result = await store.get_all()
    if result.error is not None:
        _raise_for_error(result.error)
    return [_advert_to_response(a) for a in result.unwrap()]


@router.get("/{advert_id}", response_model=AdvertResponse)
async def get_advert(
    advert_id: str,
    store: AdvertStore = Depends(get_advert_store),
) -> AdvertResponse:
    result = await store.get_by_id(advert_id)
    if result.error is not None:
        _raise_for_error(result.error)
    return _advert_to_response(result.unwrap())
