"""GET/PUT/DELETE /v1/form-state - per-session form inputs"""

from fastapi import APIRouter, Depends
from starlette.responses import Response

from benkon_quote.api.dependencies import get_form_state_repository
from benkon_quote.api.v1.schemas import FormStateSchema
from benkon_quote.i18n.messages import normalize_locale
from benkon_quote.infrastructure.state.repositories import FormStateRepository, default_form_state

router = APIRouter()


@router.get("/form-state", response_model=FormStateSchema)
def get_form_state(repository: FormStateRepository = Depends(get_form_state_repository)):
    """Saved inputs for this session, or the form defaults when nothing was saved"""
    state = repository.load() or default_form_state()
    return FormStateSchema.model_validate(state)


@router.put("/form-state", response_model=FormStateSchema)
def save_form_state(
    body: FormStateSchema,
    repository: FormStateRepository = Depends(get_form_state_repository),
):
    """
    Autosave form inputs.

    Partially filled forms are accepted as-is; validation happens on calculate.
    """
    body.language = normalize_locale(body.language)
    repository.save(body.to_domain())
    return body


@router.delete("/form-state", status_code=204)
def reset_form_state(repository: FormStateRepository = Depends(get_form_state_repository)):
    """Reset the form to its defaults"""
    repository.clear()
    return Response(status_code=204)
