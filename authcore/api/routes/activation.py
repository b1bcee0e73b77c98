from fastapi import APIRouter, Depends, status

from authcore.api.routes.auth import raise_for_error
from authcore.app.services.unit_of_work import UnitOfWork
from authcore.app.use_cases.auth import ConfirmActivationResponse, ConfirmActivationUseCase
from authcore.depends import get_unit_of_work

# Activation emails link to /activate/{token}, outside the /auth prefix.
router = APIRouter(tags=["Activation"])


@router.get(
    "/activate/{token}",
    status_code=status.HTTP_200_OK,
    response_model=ConfirmActivationResponse,
)
async def activate(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    result = await ConfirmActivationUseCase(uow).execute(token)

    if result.is_err():
        raise_for_error(result.error)

    return result.value
