"""
Session Routes
One wizard session = one profile + at most one recommendation
"""

from fastapi import APIRouter, HTTPException
from fastapi.responses import PlainTextResponse

from invest_advisor.domain.models import AnalysisResult, InvalidProfileError
from invest_advisor.domain.schemas.advisor import (
    InvestmentProfileRequest,
    SessionStateSchema,
    StepUpdate,
)
from invest_advisor.domain.services.session_state import AdvisorState
from invest_advisor.reports.recommendation_report import render_text_report
from invest_advisor.services.session_service import SessionNotFoundError, SessionStore

router = APIRouter()


def get_session_store() -> SessionStore:
    from invest_advisor.main import session_store

    if session_store is None:
        raise HTTPException(status_code=500, detail="Session store not initialised")
    return session_store


def _to_schema(session_id: str, state: AdvisorState) -> dict:
    return {
        "session_id": session_id,
        "current_step": int(state.current_step),
        "is_loading": state.is_loading,
        "exchange_rate": state.exchange_rate,
        "profile": state.profile.to_dict() if state.profile else None,
        "recommendation": state.recommendation.to_dict() if state.recommendation else None,
    }


def _not_found(session_id: str) -> HTTPException:
    return HTTPException(status_code=404, detail=f"Session not found: {session_id}")


def _load(store: SessionStore, session_id: str) -> AdvisorState:
    try:
        return store.get(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("", response_model=SessionStateSchema, status_code=201)
async def create_session():
    store = get_session_store()
    session_id = store.create()
    return _to_schema(session_id, store.get(session_id))


@router.get("/{session_id}", response_model=SessionStateSchema)
async def get_session(session_id: str):
    store = get_session_store()
    return _to_schema(session_id, _load(store, session_id))


@router.delete("/{session_id}", status_code=204)
async def delete_session(session_id: str):
    store = get_session_store()
    try:
        await store.delete(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)


@router.post("/{session_id}/profile", response_model=SessionStateSchema)
async def submit_profile(session_id: str, payload: InvestmentProfileRequest):
    store = get_session_store()
    _load(store, session_id)
    try:
        profile = payload.to_domain()
    except InvalidProfileError as exc:
        raise HTTPException(status_code=400, detail=str(exc))
    try:
        state = await store.submit_profile(session_id, profile)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return _to_schema(session_id, state)


@router.post("/{session_id}/analyze", response_model=SessionStateSchema)
async def analyze_session(session_id: str):
    """
    Run the analysis for the stored profile; replaces any earlier recommendation
    """
    store = get_session_store()
    state = _load(store, session_id)
    if state.profile is None:
        raise HTTPException(status_code=409, detail="Submit a profile first")
    try:
        state = await store.analyze(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except ValueError as exc:
        # Profile cleared by a reset queued ahead of this analysis
        raise HTTPException(status_code=409, detail=str(exc))
    return _to_schema(session_id, state)


@router.post("/{session_id}/step", response_model=SessionStateSchema)
async def go_to_step(session_id: str, payload: StepUpdate):
    store = get_session_store()
    _load(store, session_id)
    try:
        state = await store.go_to_step(session_id, payload.step)
    except SessionNotFoundError:
        raise _not_found(session_id)
    except ValueError as exc:
        raise HTTPException(status_code=409, detail=str(exc))
    return _to_schema(session_id, state)


@router.post("/{session_id}/reset", response_model=SessionStateSchema)
async def reset_session(session_id: str):
    store = get_session_store()
    try:
        state = await store.reset(session_id)
    except SessionNotFoundError:
        raise _not_found(session_id)
    return _to_schema(session_id, state)


@router.get("/{session_id}/report", response_class=PlainTextResponse)
async def session_report(session_id: str):
    store = get_session_store()
    state = _load(store, session_id)
    if state.profile is None or state.recommendation is None:
        raise HTTPException(status_code=409, detail="No recommendation yet")

    result = AnalysisResult(recommendation=state.recommendation, exchange_rate=state.exchange_rate)
    return render_text_report(state.profile, result)
