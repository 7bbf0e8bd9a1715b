"""Combat session endpoints: setup, state, abilities, movement and turns."""

from fastapi import APIRouter, HTTPException, Request
from pydantic import BaseModel

from engine.combat import advance_turn, get_current_actor, move_participant, process_ability
from engine.grid import calculate_movement_range
from engine.missions import setup_mission
from models.actions import AbilityRequest, AbilityResult, MoveRequest, MoveResult
from models.game_state import CombatSession

router = APIRouter()


class CreateSessionRequest(BaseModel):
    """Request body for starting a mission."""
    mission_id: str


class AbilityResponse(BaseModel):
    """An ability result plus the combat outcome, if combat just ended."""
    result: AbilityResult
    outcome: str | None = None


def _get_session(request: Request, session_id: str) -> CombatSession:
    session = request.app.state.sessions.get(session_id)
    if session is None:
        raise HTTPException(status_code=404, detail=f"Session '{session_id}' not found")
    return session


def _session_state(session: CombatSession) -> dict:
    current = get_current_actor(session)
    return {
        "session_id": session.id,
        "name": session.name,
        "status": session.status.value,
        "round_number": session.round_number,
        "current_turn_index": session.current_turn_index,
        "turn_order": session.turn_order,
        "current_actor": current.summary() if current else None,
        "participants": [p.summary() for p in session.participants.values()],
        "outcome": session.outcome.value if session.outcome else None,
        "map": {"width": session.width, "height": session.height},
    }


@router.post("")
def create_session(body: CreateSessionRequest, request: Request) -> dict:
    """Set up a mission and start combat."""
    try:
        session = setup_mission(body.mission_id, request.app.state.catalog)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    request.app.state.sessions[session.id] = session
    return _session_state(session)


@router.get("/{session_id}")
def get_session_state(session_id: str, request: Request) -> dict:
    """Round, turn, current actor and participant panels for the HUD."""
    return _session_state(_get_session(request, session_id))


@router.get("/{session_id}/log")
def get_session_log(session_id: str, request: Request) -> list[dict]:
    session = _get_session(request, session_id)
    return [event.model_dump(mode="json") for event in session.event_log]


@router.post("/{session_id}/abilities", response_model=AbilityResponse)
def use_ability(session_id: str, body: AbilityRequest, request: Request) -> AbilityResponse:
    """Execute an ability for the current actor.

    Rule failures come back with success=false and a message to show.
    """
    session = _get_session(request, session_id)
    result = process_ability(session, body, request.app.state.catalog, request.app.state.rng)
    return AbilityResponse(
        result=result,
        outcome=session.outcome.value if session.outcome else None,
    )


@router.post("/{session_id}/move", response_model=MoveResult)
def move(session_id: str, body: MoveRequest, request: Request) -> MoveResult:
    """Walk the current actor to a cell."""
    session = _get_session(request, session_id)
    current = get_current_actor(session)
    if not session.is_active or current is None or current.id != body.actor_id:
        raise HTTPException(status_code=409, detail="It's not your turn")
    return move_participant(session, body)


@router.get("/{session_id}/participants/{participant_id}/movement-range")
def movement_range(session_id: str, participant_id: str, request: Request) -> list[dict]:
    """Cells a participant can walk to with its remaining movement."""
    session = _get_session(request, session_id)
    actor = session.get_participant(participant_id)
    if actor is None:
        raise HTTPException(status_code=404, detail=f"Participant '{participant_id}' not found")
    cells = calculate_movement_range(actor.position, actor.remaining_speed, session.grid)
    return [{"x": x, "y": y} for x, y in cells]


@router.post("/{session_id}/end-turn")
def end_turn(session_id: str, request: Request) -> dict:
    """Advance the turn, playing out enemy turns that follow."""
    session = _get_session(request, session_id)
    if not session.is_active:
        raise HTTPException(
            status_code=400,
            detail=f"Combat is not active (status: {session.status.value})",
        )
    advance_turn(session, request.app.state.catalog, request.app.state.rng)
    return _session_state(session)
